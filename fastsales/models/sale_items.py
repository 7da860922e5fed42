# models/sale_items.py

from sqlalchemy import Column, Index, Integer, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from fastsales.database import Base


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(String(36), primary_key=True)

    # NULL for legacy standalone lines
    sale_id = Column(String(36), ForeignKey("sales.id"), nullable=True, index=True)

    # No foreign key: lines may outlive or predate their product
    product_id = Column(String(36), nullable=False, index=True)
    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=True)

    date_of_sale = Column(DateTime(timezone=True), nullable=False, index=True)

    # Position within the parent transaction, in the order the lines were sent
    line_number = Column(Integer, nullable=True)

    quantity = Column(Integer, nullable=False)
    discount = Column(Integer, nullable=False, default=0)
    total_cents = Column(Integer, nullable=False)
    total_resolved = Column(Integer, nullable=False, default=0)
    note = Column(Text, nullable=True)

    # Catalog snapshot taken when the line is written
    product_name = Column(String, nullable=True)
    price_per_item = Column(Integer, nullable=True)

    sale = relationship("Sale", back_populates="items")

    __table_args__ = (
        Index("ix_sale_items_product_name", "product_name"),
    )
