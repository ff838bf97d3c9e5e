# storefront/services/order_service.py
from contextlib import nullcontext
from decimal import Decimal, InvalidOperation
from typing import NamedTuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models._ids import new_id
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import Conflict, Forbidden, InvalidRequest, NotFound
from storefront.domain.order_status import OrderStatus, PaymentMethod, can_transition, parse_status
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.views import order_view, admin_order_view
from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

BEST_EFFORT = "best_effort"
STRICT = "strict"


class OrderLine(NamedTuple):
    product_id: str
    quantity: int
    price: Decimal


def _field(raw, name):
    if isinstance(raw, dict):
        return raw.get(name)
    return getattr(raw, name, None)


def parse_line(raw) -> OrderLine | None:
    """
    A line is valid when it names a product and carries a positive
    price and quantity. Anything else is dropped, not rejected.
    """
    product = _field(raw, "product")
    price = _field(raw, "price")
    quantity = _field(raw, "quantity")
    if not product or price is None or quantity is None:
        return None
    if isinstance(price, bool) or isinstance(quantity, bool):
        return None
    try:
        price = Decimal(str(price))
        quantity = Decimal(str(quantity))
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not price.is_finite() or not quantity.is_finite():
        return None
    # 2.7 is dropped like "1.5", never truncated
    if quantity != quantity.to_integral_value():
        return None
    if price <= 0 or quantity <= 0:
        return None
    return OrderLine(product_id=str(product), quantity=int(quantity), price=price)


class OrderService:
    """
    Order lifecycle and stock reconciliation.

    Commands (place, cancel, delete, set status) touch products, carts and
    the order ledger. There is no cross-table transaction under the
    best-effort policy: each stock adjustment is its own write.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.carts = CartRepo(db)
        self.users = UserRepo(db)
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

        self.stock_policy = settings.STOCK_POLICY
        self.locks_enabled = settings.PRODUCT_LOCKS_ENABLED
        self.restore_on_cancel = settings.RESTORE_STOCK_ON_CANCEL
        self.strict_transitions = settings.STRICT_STATUS_TRANSITIONS

    # =====================================================
    # COMMANDS
    # =====================================================
    def place_order(
        self,
        user_id: str,
        lines,
        address: str | None = None,
        phone: str | None = None,
        payment_method: str | None = None,
    ):
        """
        Use Case: placing an order.

        1. validates the line set and the owning user
        2. decrements stock for every valid line
        3. saves the order with its total and a fresh order id
        4. clears the user's cart
        """
        if lines is None or not isinstance(lines, (list, tuple)):
            raise InvalidRequest("Invalid request data")

        user = self.users.get_user(user_id)
        if not user:
            raise NotFound("User not found")

        valid = [line for line in map(parse_line, lines) if line is not None]
        if not valid:
            raise InvalidRequest("No valid items in order")

        total = sum((line.price * line.quantity for line in valid), Decimal("0.00"))
        try:
            method = PaymentMethod(payment_method or PaymentMethod.COD).value
        except ValueError:
            raise InvalidRequest("Invalid payment method")

        order = OrderModel(
            order_id=new_id(),
            user_id=user_id,
            user_name=user.name,
            total_amount=total,
            status=OrderStatus.PENDING.value,
            payment_method=method,
            address=address,
            phone=phone,
            items=[
                OrderItemModel(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    price=line.price,
                    position=pos,
                )
                for pos, line in enumerate(valid)
            ],
        )

        if self.stock_policy == STRICT:
            self._place_strict(order, valid)
        else:
            self._place_best_effort(order, valid)

        logger.info(
            f"Order {order.order_id} placed by user {user_id}: "
            f"{len(valid)} of {len(lines)} lines, total {total}"
        )
        self.notification_service.send_order_placed(user_id, order.order_id, total)

        return {"message": "Order placed successfully"}

    def _place_best_effort(self, order: OrderModel, lines: list[OrderLine]):
        # stock writes are attempted once each; a failure never blocks the order
        for line in lines:
            try:
                matched = self.products.adjust_stock(line.product_id, -line.quantity)
                self.products.commit()
            except SQLAlchemyError as e:
                self.products.rollback()
                logger.error(f"Stock update failed for product {line.product_id}: {e}")
                continue
            if not matched:
                logger.warning(f"Stock update skipped, product {line.product_id} not found")

        self.orders.create_order(order)
        self.orders.commit()

        self.carts.clear(order.user_id)
        self.carts.commit()

    def _place_strict(self, order: OrderModel, lines: list[OrderLine]):
        with self._product_locks([line.product_id for line in lines], order.order_id):
            try:
                for line in lines:
                    if not self.products.reserve_stock(line.product_id, line.quantity):
                        raise Conflict(f"Insufficient stock for product {line.product_id}")

                self.orders.create_order(order)
                self.carts.clear(order.user_id)
                self.orders.commit()
            except Exception:
                self.orders.rollback()
                raise

    def _product_locks(self, product_ids, owner: str):
        if not self.locks_enabled:
            return nullcontext()
        if self.lock_service is None:
            self.lock_service = LockService()
        return self.lock_service.hold_product_locks(product_ids, owner)

    def cancel_order(self, requester_id: str, user_id: str, order_id: str):
        """
        Use Case: user cancels their own order.
        Re-cancelling is a no-op, not an error.
        """
        if requester_id != user_id:
            raise Forbidden("Forbidden")

        order = self.orders.get_user_order(order_id, user_id)
        if not order:
            raise NotFound("Order not found")

        previous = order.status
        if previous == OrderStatus.CANCELLED.value:
            return {"message": "Order cancelled"}

        if self.strict_transitions and not can_transition(previous, OrderStatus.CANCELLED.value):
            raise Conflict(f"Cannot cancel an order that is {previous}")

        self._move_status(order, OrderStatus.CANCELLED.value)
        self.orders.commit()

        logger.info(f"Order {order_id} cancelled by user {user_id} (was {previous})")
        self.notification_service.send_status_changed(user_id, order_id, OrderStatus.CANCELLED.value)

        return {"message": "Order cancelled"}

    def admin_update_order_status(self, order_id: str, new_status: str):
        """
        Use Case: admin sets an order's status.
        Any status may follow any other unless strict transitions are on.
        """
        order = self.orders.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        status = parse_status(new_status)
        if status is None:
            raise InvalidRequest("Invalid order status")

        if self.strict_transitions and not can_transition(order.status, status.value):
            raise Conflict(f"Cannot move order from {order.status} to {status.value}")

        previous = order.status
        self._move_status(order, status.value)
        self.orders.commit()

        logger.info(f"Order {order_id} status {previous} -> {status.value}")
        self.notification_service.send_status_changed(order.user_id, order_id, status.value)

        return {"message": "Order status updated"}

    def _move_status(self, order: OrderModel, new_status: str):
        """
        Conditional status write shared by the user and admin paths.

        With RESTORE_STOCK_ON_CANCEL the order's stock_restored flag follows
        the status in the same UPDATE: entering Cancelled puts stock back
        once, leaving Cancelled takes it out again. Caller commits.
        """
        previous = order.status
        cancelled = OrderStatus.CANCELLED.value
        restored = bool(order.stock_restored)

        delta = 0
        flag = None
        if self.restore_on_cancel:
            if new_status == cancelled and previous != cancelled and not restored:
                delta, flag = 1, True
            elif new_status != cancelled and restored:
                delta, flag = -1, False

        rowcount = self.orders.update_order_status(
            order.order_id, new_status, only_from=previous, stock_restored=flag
        )
        if rowcount == 0:
            self.orders.rollback()
            raise Conflict("Order was modified by another operation")

        if delta:
            for item in order.items:
                self.products.adjust_stock(item.product_id, delta * item.quantity)
            logger.info(f"Order {order.order_id} stock {'restored' if delta > 0 else 'taken back'}")

    def admin_delete_order(self, order_id: str):
        """
        Use Case: admin deletes an order.
        Stock comes back for every line unless it is already back:
        with RESTORE_STOCK_ON_CANCEL that is the order's stock_restored
        flag, otherwise a Cancelled status is taken to mean it.
        """
        order = self.orders.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        if self.restore_on_cancel:
            restore = not order.stock_restored
        else:
            restore = order.status != OrderStatus.CANCELLED.value
        lines = [(i.product_id, i.quantity) for i in order.items]

        try:
            if self.orders.delete_order(order) == 0:
                raise NotFound("Order not found")
            if restore:
                for product_id, quantity in lines:
                    self.products.adjust_stock(product_id, quantity)
            self.orders.commit()
        except Exception:
            self.orders.rollback()
            raise

        logger.info(f"Order {order_id} deleted, stock restored: {restore}")

        if restore:
            return {"message": "Order deleted and stock restored"}
        return {"message": "Order deleted"}

    # =====================================================
    # QUERIES
    # =====================================================
    def list_orders_for_user(self, requester_id: str, user_id: str):
        if requester_id != user_id:
            raise Forbidden("Forbidden")

        orders = self.orders.list_for_user(user_id)
        products = self.products.get_products(i.product_id for o in orders for i in o.items)
        return [order_view(o, products) for o in orders]

    def admin_get_order(self, order_id: str):
        order = self.orders.get_order(order_id)
        if not order:
            raise NotFound("Order not found")

        user = self.users.get_user(order.user_id)
        products = self.products.get_products(i.product_id for i in order.items)
        return admin_order_view(order, user, products)
