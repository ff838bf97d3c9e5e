# storefront/repos/cart_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_by_user(self, user_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def add_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def clear(self, user_id: str) -> int:
        """Empties the user's cart, the cart row itself stays."""
        cart_ids = select(CartModel.id).where(CartModel.user_id == user_id)
        res = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id.in_(cart_ids))
        )
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
