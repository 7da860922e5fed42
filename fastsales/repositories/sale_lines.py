# fastsales/repositories/sale_lines.py

from sqlalchemy import func
from sqlalchemy.orm import Session

from fastsales.core.errors import RowMappingError
from fastsales.models.products import Product
from fastsales.models.sale_items import SaleItem
from fastsales.repositories.base import QueryFilter, paginate, stored_uuid
from fastsales.schemas.sale import SaleItemResponse


class SaleLineRepository:
    """Reads sale lines with their snapshot fields resolved.

    A line's ``product_name`` and ``price_per_item`` come from the values
    stored on the line. Lines written before those columns existed carry
    NULLs there, so the live catalog values are used instead.
    """

    columns = (
        SaleItem.id,
        SaleItem.sale_id,
        SaleItem.product_id,
        SaleItem.customer_id,
        SaleItem.date_of_sale,
        SaleItem.quantity,
        SaleItem.discount,
        SaleItem.total_cents,
        SaleItem.total_resolved,
        SaleItem.note,
        func.coalesce(SaleItem.product_name, Product.name).label("product_name"),
        func.coalesce(SaleItem.price_per_item, Product.price_cents).label("price_per_item"),
    )

    def __init__(self, db: Session):
        self.db = db

    def resolved_query(self):
        return (
            self.db.query(*self.columns)
            .select_from(SaleItem)
            .outerjoin(Product, Product.id == SaleItem.product_id)
        )

    @staticmethod
    def from_row(row) -> SaleItemResponse:
        if row.date_of_sale is None:
            raise RowMappingError(f"Sale line {row.id!r} has no date")

        return SaleItemResponse(
            id=stored_uuid(row.id, "sale line id"),
            sale_id=stored_uuid(row.sale_id, "sale id"),
            product_id=stored_uuid(row.product_id, "product id"),
            customer_id=stored_uuid(row.customer_id, "customer id"),
            date_of_sale=row.date_of_sale,
            quantity=row.quantity,
            discount=row.discount,
            total_cents=row.total_cents,
            total_resolved=row.total_resolved,
            note=row.note,
            product_name=row.product_name,
            price_per_item=row.price_per_item,
        )

    def get(self, line_id: str):
        row = self.resolved_query().filter(SaleItem.id == line_id).first()
        if row is None:
            return None
        return self.from_row(row)

    def list_for_sale(self, sale_id: str):
        rows = (
            self.resolved_query()
            .filter(SaleItem.sale_id == sale_id)
            .order_by(SaleItem.line_number.asc(), SaleItem.id.asc())
            .all()
        )
        return [self.from_row(row) for row in rows]

    def next_line_number(self, sale_id: str) -> int:
        last = (
            self.db.query(func.max(SaleItem.line_number))
            .filter(SaleItem.sale_id == sale_id)
            .scalar()
        )
        return (last or 0) + 1

    def list_page(self, filters: QueryFilter, page: int, limit: int):
        query = filters.apply(self.resolved_query())
        rows = paginate(
            query.order_by(SaleItem.date_of_sale.desc(), SaleItem.id.desc()),
            page,
            limit,
        ).all()
        return [self.from_row(row) for row in rows]

    def period_total(self, filters: QueryFilter) -> int:
        total = filters.apply(
            self.db.query(func.coalesce(func.sum(SaleItem.total_cents), 0))
        ).scalar()
        return int(total or 0)
