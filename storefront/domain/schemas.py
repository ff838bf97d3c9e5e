# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.domain.order_status import PaymentMethod


class CamelModel(BaseModel):
    """Wire models use camelCase keys, Python code uses snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Principal(BaseModel):
    """Caller identity decoded from the bearer token."""

    id: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class MessageOut(BaseModel):
    message: str


# ---------- products ----------

class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    stock: int = Field(..., ge=0)
    category: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    category: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, min_length=1)


class StockRestoreIn(CamelModel):
    quantity: int = Field(..., gt=0)


class ProductOut(CamelModel):
    id: str
    name: str
    price: Decimal
    stock: int
    category: str
    image: str
    created_at: Optional[datetime] = None


class ProductsPage(CamelModel):
    products: List[ProductOut]
    total_pages: int
    current_page: int
    total_products: int


# ---------- cart ----------

class CartLineIn(CamelModel):
    product: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)


class CartUpdateIn(CamelModel):
    cart_items: List[CartLineIn] = Field(default_factory=list)


class CartLineOut(CamelModel):
    product_id: str
    product: Optional[ProductOut] = None
    quantity: int


# ---------- orders ----------

class PlaceOrderIn(CamelModel):
    # lines stay untyped: malformed ones are dropped by the order workflow, not rejected
    items: Optional[List[Any]] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None


class OrderStatusIn(CamelModel):
    status: str


class OrderLineOut(CamelModel):
    product_id: str
    product: Optional[ProductOut] = None
    quantity: int
    price: Decimal


class OrderOut(CamelModel):
    order_id: str
    user_id: str
    user_name: Optional[str] = None
    items: List[OrderLineOut]
    total_amount: Decimal
    payment_method: str
    status: str
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime


class AdminOrderOut(CamelModel):
    id: str
    order_id: str
    email: str
    name: Optional[str] = None
    items: List[OrderLineOut]
    total_amount: Decimal
    status: str
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: datetime


class OrdersPage(CamelModel):
    orders: List[AdminOrderOut]
    total_pages: int
    current_page: int
    total_orders: int


# ---------- users ----------

class UserOut(CamelModel):
    id: str
    name: str
    email: str
    role: str
    status: str
    created_at: datetime


class UsersPage(CamelModel):
    users: List[UserOut]
    total_pages: int
    current_page: int
    total_users: int


# ---------- dashboard ----------

class SalesPoint(CamelModel):
    date: str
    sales: Decimal


class MonthPoint(CamelModel):
    month: str
    orders: int
    users: int


class StatsOut(CamelModel):
    total_users: int
    total_products: int
    total_orders: int
    total_revenue: Decimal
    status_counts: Dict[str, int]
    sales_data: List[SalesPoint]
    users_vs_orders_data: List[MonthPoint]
