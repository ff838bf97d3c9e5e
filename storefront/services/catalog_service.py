# storefront/services/catalog_service.py
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import InvalidRequest, NotFound
from storefront.domain.schemas import ProductCreate, ProductUpdate
from storefront.repos.product_repo import ProductRepo, PRICE_RANGES
from storefront.services.views import product_view, page_count
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    # query
    def list_products(
        self,
        category: str | None = None,
        price_range: str | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = 6,
    ):
        if price_range and price_range != "all" and price_range not in PRICE_RANGES:
            raise InvalidRequest("Invalid price range")

        products, total = self.repo.list_products(
            category=category,
            price_range=price_range,
            search=search,
            skip=(page - 1) * limit,
            limit=limit,
        )
        return {
            "products": [product_view(p) for p in products],
            "total_pages": page_count(total, limit),
            "current_page": page,
            "total_products": total,
        }

    # commands
    def add_product(self, payload: ProductCreate):
        product = self.repo.add_product(ProductModel(**payload.model_dump()))
        self.repo.commit()
        logger.info(f"Product {product.id} ({product.name}) added")
        return product_view(product)

    def update_product(self, product_id: str, payload: ProductUpdate):
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(product, field, value)

        self.repo.commit()
        logger.info(f"Product {product_id} updated")
        return product_view(product)

    def delete_product(self, product_id: str):
        if self.repo.delete_product(product_id) == 0:
            self.repo.rollback()
            raise NotFound("Product not found")
        self.repo.commit()
        logger.info(f"Product {product_id} deleted")
        return {"message": "Product deleted"}

    def restore_stock(self, product_id: str, quantity: int):
        if quantity <= 0:
            raise InvalidRequest("Quantity must be greater than 0")

        if self.repo.adjust_stock(product_id, quantity) == 0:
            self.repo.rollback()
            raise NotFound("Product not found")
        self.repo.commit()
        logger.info(f"Restored {quantity} units of product {product_id}")
        return {"message": "Stock restored"}
