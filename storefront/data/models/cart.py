from sqlalchemy import Column, ForeignKey, String, DateTime
from sqlalchemy.orm import relationship

from storefront.data.database import Base
from storefront.data.models._ids import new_id, utcnow


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    user_name = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.position",
    )
