from sqlalchemy import Boolean, Column, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models._ids import new_id, utcnow


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    order_id = Column(String(36), nullable=False, unique=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    # snapshot taken at order time, not kept in sync with the user record
    user_name = Column(String, nullable=True)

    total_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False, default="Pending")  # Pending, Shipped, Delivered, Cancelled
    payment_method = Column(String(20), nullable=False, default="cod")
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    # set while stock for a cancelled order has been put back (RESTORE_STOCK_ON_CANCEL)
    stock_restored = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
    )
