# storefront/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_principal, http_error
from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CartLineOut, CartUpdateIn, Principal
from storefront.services.cart_service import CartService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("/{user_id}", response_model=List[CartLineOut])
def get_cart(
    user_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_cart(principal.id, user_id)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Fetch cart failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch cart")


@router.put("/{user_id}", response_model=List[CartLineOut])
def update_cart(
    user_id: str,
    payload: CartUpdateIn,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.replace_cart(principal.id, user_id, payload.cart_items)
    except StorefrontError as e:
        raise http_error(e)
    except SQLAlchemyError as e:
        logger.error(f"Update cart failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to update cart")
