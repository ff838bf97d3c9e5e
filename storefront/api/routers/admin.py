# storefront/api/routers/admin.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.deps import http_error, require_admin
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import (
    AdminOrderOut,
    MessageOut,
    OrderStatusIn,
    OrdersPage,
    ProductCreate,
    ProductOut,
    ProductUpdate,
    StatsOut,
    UsersPage,
)
from storefront.services.admin_service import AdminService
from storefront.services.catalog_service import CatalogService
from storefront.services.order_service import OrderService
from storefront.utils.settings import DEFAULT_PAGE_SIZE
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# every route here requires an admin principal
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _failed(message: str, e: Exception) -> HTTPException:
    logger.error(f"{message}: {e}")
    return HTTPException(status_code=500, detail=message)


# ---------- dashboard ----------

@router.get("/stats", response_model=StatsOut)
def dashboard_stats(db: Session = Depends(get_db)):
    try:
        return AdminService(db).get_dashboard_stats()
    except SQLAlchemyError as e:
        raise _failed("Failed to fetch dashboard statistics", e)


@router.get("/users", response_model=UsersPage)
def list_users(
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db),
):
    try:
        return AdminService(db).get_all_users(search, page, limit)
    except SQLAlchemyError as e:
        raise _failed("Failed to fetch users", e)


# ---------- orders ----------

@router.get("/orders", response_model=OrdersPage)
def list_orders(
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db),
):
    try:
        return AdminService(db).get_all_orders(search, page, limit)
    except SQLAlchemyError as e:
        raise _failed("Failed to fetch orders", e)


@router.get("/orders/{order_id}", response_model=AdminOrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)):
    try:
        return OrderService(db).admin_get_order(order_id)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        raise _failed("Failed to fetch order", e)


@router.patch("/orders/status/{order_id}", response_model=MessageOut)
def update_order_status(order_id: str, payload: OrderStatusIn, db: Session = Depends(get_db)):
    try:
        return OrderService(db).admin_update_order_status(order_id, payload.status)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        raise _failed("Failed to update order status", e)


@router.delete("/orders/{order_id}", response_model=MessageOut)
def delete_order(order_id: str, db: Session = Depends(get_db)):
    try:
        return OrderService(db).admin_delete_order(order_id)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        raise _failed("Failed to delete order", e)


# ---------- products ----------

@router.post("/products", response_model=ProductOut, status_code=201)
def add_product(payload: ProductCreate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).add_product(payload)
    except SQLAlchemyError as e:
        raise _failed("Failed to add product", e)


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(product_id: str, payload: ProductUpdate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).update_product(product_id, payload)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        raise _failed("Failed to update product", e)


@router.delete("/products/{product_id}", response_model=MessageOut)
def delete_product(product_id: str, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).delete_product(product_id)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        raise _failed("Failed to delete product", e)
