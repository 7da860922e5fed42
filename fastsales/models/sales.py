# models/sales.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from fastsales.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(String(36), primary_key=True)

    customer_id = Column(String(36), ForeignKey("customers.id"), nullable=True, index=True)

    date_and_time = Column(DateTime(timezone=True), nullable=False, index=True)

    # Aggregates are stored exactly as the caller sent them
    total_cents = Column(Integer, nullable=False)
    discount = Column(Integer, nullable=False, default=0)
    total_resolved = Column(Integer, nullable=False, default=0)

    sales_channel = Column(String, nullable=False)
    staff_responsible = Column(String(36), nullable=False, index=True)

    company_branch = Column(String, nullable=True)
    car_number = Column(String, nullable=True)
    receipt_number = Column(String, nullable=True, index=True)

    items = relationship("SaleItem", back_populates="sale")


    __table_args__ = (
        Index("ix_sales_staff_date", "staff_responsible", "date_and_time"),
        CheckConstraint(
            "sales_channel IN ('mobile', 'web')",
            name="ck_sales_channel_valid",
        ),
    )
