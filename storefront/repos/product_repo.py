# storefront/repos/product_repo.py
from decimal import Decimal

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel

PRICE_RANGES = {
    "under-500": (None, Decimal("500"), False),
    "500-1000": (Decimal("500"), Decimal("1000"), True),
    "above-1000": (Decimal("1000"), None, False),
}


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids) -> dict[str, ProductModel]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(select(ProductModel).where(ProductModel.id.in_(ids))).scalars()
        return {p.id: p for p in rows}

    def count_products(self) -> int:
        return self.db.scalar(select(func.count()).select_from(ProductModel))

    def list_products(
        self,
        category: str | None,
        price_range: str | None,
        search: str | None,
        skip: int,
        limit: int,
    ) -> tuple[list[ProductModel], int]:
        stmt = select(ProductModel)

        if category and category != "all":
            stmt = stmt.where(ProductModel.category == category.lower())

        if search:
            stmt = stmt.where(ProductModel.name.icontains(search, autoescape=True))

        if price_range and price_range != "all":
            low, high, inclusive = PRICE_RANGES[price_range]
            if low is not None:
                stmt = stmt.where(ProductModel.price >= low if inclusive else ProductModel.price > low)
            if high is not None:
                stmt = stmt.where(ProductModel.price <= high if inclusive else ProductModel.price < high)

        total = self.db.scalar(select(func.count()).select_from(stmt.subquery()))
        products = self.db.execute(
            stmt.order_by(ProductModel.created_at).offset(skip).limit(limit)
        ).scalars().all()
        return products, total

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def delete_product(self, product_id: str) -> int:
        res = self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        return res.rowcount

    def adjust_stock(self, product_id: str, delta: int) -> int:
        """
        Unconditional increment (delta may be negative). No floor check.
        Returns the number of matched rows: 0 means the product is gone.
        """
        res = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock + delta)
        )
        return res.rowcount

    def reserve_stock(self, product_id: str, quantity: int) -> bool:
        """
        Decrement-if-available in a single statement.
        False when the product is missing or has less than `quantity` left.
        """
        res = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
        )
        return res.rowcount == 1

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
