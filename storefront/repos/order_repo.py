# storefront/repos/order_repo.py
from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.user import UserModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: str) -> OrderModel | None:
        """Lookup by the public order identifier, not the storage id."""
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.order_id == order_id)
            .options(selectinload(OrderModel.items))
        ).scalar_one_or_none()

    def get_user_order(self, order_id: str, user_id: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.order_id == order_id,
                OrderModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def list_for_user(self, user_id: str) -> list[OrderModel]:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .options(selectinload(OrderModel.items))
            .order_by(OrderModel.created_at.desc())
        ).scalars().all()

    def update_order_status(
        self,
        order_id: str,
        status: str,
        only_from: str | None = None,
        stock_restored: bool | None = None,
    ) -> int:
        """
        Sets the status. With only_from the row must still hold that status
        (optimistic check), 0 rows means someone else changed it first.
        stock_restored, when given, is written in the same statement.
        """
        conditions = [OrderModel.order_id == order_id]
        if only_from is not None:
            conditions.append(OrderModel.status == only_from)
        values = {"status": status}
        if stock_restored is not None:
            values["stock_restored"] = stock_restored
        res = self.db.execute(
            update(OrderModel)
            .where(*conditions)
            .values(**values)
        )
        return res.rowcount

    def delete_order(self, order: OrderModel) -> int:
        """
        Deletes lines and header. The row count of the header delete tells
        a concurrent deleter that it lost the race.
        """
        self.db.execute(
            delete(OrderItemModel)
            .where(OrderItemModel.order_id == order.id)
        )
        res = self.db.execute(
            delete(OrderModel)
            .where(OrderModel.id == order.id)
        )
        return res.rowcount

    def ledger_rows(self):
        """(status, total_amount, created_at) for every order in the ledger."""
        return self.db.execute(
            select(OrderModel.status, OrderModel.total_amount, OrderModel.created_at)
        ).all()

    def search_with_users(
        self, search: str | None, skip: int, limit: int
    ) -> tuple[list[tuple[OrderModel, UserModel]], int]:
        filters = []
        if search:
            filters.append(
                or_(
                    OrderModel.order_id.icontains(search, autoescape=True),
                    UserModel.email.icontains(search, autoescape=True),
                    UserModel.name.icontains(search, autoescape=True),
                )
            )

        # inner join: orders whose owner no longer exists drop out
        total = self.db.scalar(
            select(func.count(OrderModel.id))
            .select_from(OrderModel)
            .join(UserModel, UserModel.id == OrderModel.user_id)
            .where(*filters)
        )
        rows = self.db.execute(
            select(OrderModel, UserModel)
            .join(UserModel, UserModel.id == OrderModel.user_id)
            .where(*filters)
            .options(selectinload(OrderModel.items))
            .order_by(OrderModel.created_at.desc())
            .offset(skip)
            .limit(limit)
        ).all()
        return [(o, u) for o, u in rows], total

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
