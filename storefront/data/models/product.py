from sqlalchemy import Column, Integer, String, DateTime, Numeric
from sqlalchemy.orm import validates

from storefront.data.database import Base
from storefront.data.models._ids import new_id, utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    # no CHECK(stock >= 0): the best-effort policy lets concurrent orders oversell
    stock = Column(Integer, nullable=False, default=0)
    category = Column(String, nullable=False, index=True)
    image = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    @validates("category")
    def _lowercase_category(self, key, value):
        return value.strip().lower() if value else value

    @validates("name")
    def _trim_name(self, key, value):
        return value.strip() if value else value
