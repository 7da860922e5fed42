# fastsales/models/customers.py

from sqlalchemy import Column, String

from fastsales.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True)
    first_name = Column(String, nullable=False, index=True)
    last_name = Column(String, nullable=False, index=True)
    middle_name = Column(String, nullable=True)
    mobile_number = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
