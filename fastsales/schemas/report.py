# schemas/report.py

from pydantic import BaseModel
import datetime


class SalesStats(BaseModel):
    total_sales_cents: int = 0
    count: int = 0


class DailySales(BaseModel):
    date: datetime.date
    total_sales_cents: int
    count: int


class TopProduct(BaseModel):
    product_name: str
    total_sales_cents: int


class ProductSalesSummary(BaseModel):
    product_name: str
    total_quantity: int
    total_amount_cents: int
