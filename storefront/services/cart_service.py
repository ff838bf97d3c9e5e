# storefront/services/cart_service.py
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import Forbidden, NotFound
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.views import line_views
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    One cart per user. Updates replace the whole line list,
    there is no per-line patching.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    # query
    def get_cart(self, requester_id: str, user_id: str):
        if requester_id != user_id:
            raise Forbidden("Forbidden Access")

        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            return []

        products = self.products.get_products(i.product_id for i in cart.items)
        return line_views(cart.items, products, with_price=False)

    # command
    def replace_cart(self, requester_id: str, user_id: str, lines):
        if requester_id != user_id:
            raise Forbidden("Forbidden Access")

        user = self.users.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            cart = self.repo.add_cart(CartModel(user_id=user_id))

        # name may have changed since the cart was created
        cart.user_name = user.name
        cart.items = [
            CartItemModel(product_id=line.product, quantity=line.quantity, position=pos)
            for pos, line in enumerate(lines)
        ]
        self.repo.commit()

        logger.info(f"Cart of user {user_id} replaced with {len(lines)} lines")
        return self.get_cart(requester_id, user_id)
