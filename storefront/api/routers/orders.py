# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_principal, http_error
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import MessageOut, OrderOut, PlaceOrderIn, Principal
from storefront.services.order_service import OrderService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/place", response_model=MessageOut)
def place_order(
    payload: PlaceOrderIn,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Places an order for the caller from the submitted lines.
    Invalid lines are dropped; the caller's cart is cleared.
    """
    svc = get_service(db)
    try:
        return svc.place_order(
            user_id=principal.id,
            lines=payload.items,
            address=payload.address,
            phone=payload.phone,
            payment_method=payload.payment_method,
        )
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Order placement failed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error while placing order")


@router.get("/{user_id}", response_model=List[OrderOut])
def list_user_orders(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.list_orders_for_user(principal.id, user_id)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Fetch orders failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch orders")


@router.patch("/{user_id}/{order_id}", response_model=MessageOut)
def cancel_order(
    user_id: str,
    order_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.cancel_order(principal.id, user_id, order_id)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Cancel order failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to cancel order")
