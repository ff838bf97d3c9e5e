# storefront/repos/user_repo.py
from datetime import datetime

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def count_users(self) -> int:
        return self.db.scalar(select(func.count()).select_from(UserModel))

    def count_created_between(self, start: datetime, end: datetime) -> int:
        return self.db.scalar(
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.created_at >= start, UserModel.created_at < end)
        )

    def search_users(self, search: str | None, skip: int, limit: int) -> tuple[list[UserModel], int]:
        stmt = select(UserModel)
        if search:
            stmt = stmt.where(
                or_(
                    UserModel.name.icontains(search, autoescape=True),
                    UserModel.email.icontains(search, autoescape=True),
                )
            )

        total = self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        users = self.db.execute(
            stmt.order_by(UserModel.created_at.desc()).offset(skip).limit(limit)
        ).scalars().all()
        return users, total
