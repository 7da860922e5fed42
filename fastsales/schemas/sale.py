# schemas/sale.py

import uuid
from enum import Enum
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional


class SalesChannel(str, Enum):
    mobile = "mobile"
    web = "web"


class SaleItemInput(BaseModel):
    product_id: uuid.UUID
    customer_id: Optional[uuid.UUID] = None
    # Falls back to the transaction timestamp
    date_of_sale: Optional[datetime] = None
    quantity: int = Field(..., gt=0)
    discount: int = 0
    total_cents: int
    total_resolved: int
    note: Optional[str] = None


class SaleCreate(BaseModel):
    customer_id: Optional[uuid.UUID] = None
    date_and_time: datetime
    sale_items: List[SaleItemInput] = Field(..., min_length=1)
    total_cents: int
    discount: int = 0
    total_resolved: int
    sales_channel: SalesChannel
    # Defaults to the authenticated staff member
    staff_responsible: Optional[uuid.UUID] = None
    company_branch: Optional[str] = None
    car_number: Optional[str] = None
    receipt_number: Optional[str] = None


class SaleLineUpdate(BaseModel):
    product_id: uuid.UUID
    customer_id: Optional[uuid.UUID] = None
    date_of_sale: datetime
    quantity: int = Field(..., gt=0)
    discount: int = 0
    total_cents: int
    total_resolved: int
    note: Optional[str] = None


class SaleLineCreate(SaleLineUpdate):
    sale_id: Optional[uuid.UUID] = None


class SaleItemResponse(BaseModel):
    id: uuid.UUID
    sale_id: Optional[uuid.UUID] = None
    product_id: uuid.UUID
    customer_id: Optional[uuid.UUID] = None
    date_of_sale: datetime
    quantity: int
    discount: int
    total_cents: int
    total_resolved: int
    note: Optional[str] = None
    product_name: Optional[str] = None
    price_per_item: Optional[int] = None


class SaleResponse(BaseModel):
    id: uuid.UUID
    customer_id: Optional[uuid.UUID] = None
    customer_name: Optional[str] = None
    date_and_time: datetime
    sale_items: List[SaleItemResponse] = []
    total_cents: int
    discount: int
    total_resolved: int
    sales_channel: SalesChannel
    staff_responsible: uuid.UUID
    company_branch: Optional[str] = None
    car_number: Optional[str] = None
    receipt_number: Optional[str] = None


class SalesItemsListResponse(BaseModel):
    sales: List[SaleItemResponse]
    total_sales_period_cents: int
