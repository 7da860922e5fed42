# fastsales/models/products.py

from sqlalchemy import CheckConstraint, Column, Integer, String, Text

from fastsales.database import Base


class Product(Base):
    """Live product catalog, owned by the catalog service and only read here."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    price_cents = Column(Integer, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    product_type = Column(String, nullable=False, default="physical_good")

    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_products_price_non_negative"),
        CheckConstraint(
            "product_type IN ('physical_good', 'service')",
            name="ck_products_type_valid",
        ),
    )
