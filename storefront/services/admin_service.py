# storefront/services/admin_service.py
import calendar
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.domain.order_status import OrderStatus
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.views import admin_order_view, page_count, user_view
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SALES_DAYS = 30
TREND_MONTHS = 12


def _as_utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _month_start(year: int, month: int) -> datetime:
    return datetime(year, month, 1, tzinfo=timezone.utc)


class AdminService:
    """
    Read-only views for the admin dashboard.
    Nothing is cached: every call rescans the order ledger.
    """

    def __init__(self, db: Session):
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    def get_dashboard_stats(self, now: datetime | None = None):
        now = _as_utc(now or datetime.now(timezone.utc))
        today = now.date()

        rows = self.orders.ledger_rows()
        cancelled = OrderStatus.CANCELLED.value

        total_revenue = sum(
            (amount or Decimal("0") for status, amount, _ in rows if status != cancelled),
            Decimal("0.00"),
        )
        status_counts = Counter(status or OrderStatus.PENDING.value for status, _, _ in rows)

        daily_sales = defaultdict(lambda: Decimal("0.00"))
        monthly_orders = Counter()
        for status, amount, created_at in rows:
            if created_at is None:
                continue
            created = _as_utc(created_at)
            monthly_orders[(created.year, created.month)] += 1
            if status != cancelled:
                daily_sales[created.date()] += amount or Decimal("0")

        return {
            "total_users": self.users.count_users(),
            "total_products": self.products.count_products(),
            "total_orders": len(rows),
            "total_revenue": total_revenue,
            "status_counts": dict(status_counts),
            "sales_data": self._sales_data(today, daily_sales),
            "users_vs_orders_data": self._users_vs_orders(today, monthly_orders),
        }

    @staticmethod
    def _sales_data(today: date, daily_sales) -> list[dict]:
        days = [today - timedelta(days=offset) for offset in range(SALES_DAYS - 1, -1, -1)]
        return [
            {"date": day.isoformat(), "sales": daily_sales.get(day, Decimal("0.00"))}
            for day in days
        ]

    def _users_vs_orders(self, today: date, monthly_orders) -> list[dict]:
        points = []
        for offset in range(TREND_MONTHS - 1, -1, -1):
            year, month = _shift_month(today.year, today.month, -offset)
            next_year, next_month = _shift_month(year, month, 1)
            users = self.users.count_created_between(
                _month_start(year, month), _month_start(next_year, next_month)
            )
            points.append(
                {
                    "month": f"{calendar.month_abbr[month]} {year}",
                    "orders": monthly_orders.get((year, month), 0),
                    "users": users,
                }
            )
        return points

    def get_all_orders(self, search: str | None = None, page: int = 1, limit: int = 10):
        rows, total = self.orders.search_with_users(search, skip=(page - 1) * limit, limit=limit)
        products = self.products.get_products(
            i.product_id for order, _ in rows for i in order.items
        )
        return {
            "orders": [admin_order_view(order, user, products) for order, user in rows],
            "total_pages": page_count(total, limit),
            "current_page": page,
            "total_orders": total,
        }

    def get_all_users(self, search: str | None = None, page: int = 1, limit: int = 10):
        users, total = self.users.search_users(search, skip=(page - 1) * limit, limit=limit)
        return {
            "users": [user_view(u) for u in users],
            "total_pages": page_count(total, limit),
            "current_page": page,
            "total_users": total,
        }
