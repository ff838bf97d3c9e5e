# storefront/api/routers/products.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_principal, http_error
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import MessageOut, Principal, ProductsPage, StockRestoreIn
from storefront.services.catalog_service import CatalogService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return CatalogService(db)


@router.get("", response_model=ProductsPage)
def list_products(
    category: Optional[str] = None,
    price_range: Optional[str] = Query(None, alias="priceRange"),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(6, ge=1, le=100),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.list_products(category, price_range, search, page, limit)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Fetch products failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch products")


@router.patch("/{product_id}/restore", response_model=MessageOut)
def restore_stock(
    product_id: str,
    payload: StockRestoreIn,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.restore_stock(product_id, payload.quantity)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Restore stock failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to restore stock")
