from sqlalchemy import Column, Integer, ForeignKey, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(String(36), ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    # weak reference, the cart does not own the product
    product_id = Column(String(36), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    position = Column(Integer, nullable=False, default=0)

    cart = relationship("CartModel", back_populates="items")
