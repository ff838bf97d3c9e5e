# storefront/domain/order_status.py
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    COD = "cod"
    CARD = "card"
    UPI = "upi"
    RAZORPAY = "razorpay"


# only consulted when STRICT_STATUS_TRANSITIONS is on
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}


def parse_status(value) -> OrderStatus | None:
    try:
        return OrderStatus(value)
    except ValueError:
        return None


def can_transition(current: str, new: str) -> bool:
    if current == new:
        return True
    cur = parse_status(current)
    nxt = parse_status(new)
    if cur is None or nxt is None:
        return False
    return nxt in ALLOWED_TRANSITIONS[cur]
