# fastsales/repositories/sales.py

from sqlalchemy.orm import Session

from fastsales.core.errors import RowMappingError
from fastsales.models.customers import Customer
from fastsales.models.sales import Sale
from fastsales.repositories.base import QueryFilter, paginate, stored_uuid
from fastsales.schemas.sale import SaleResponse, SalesChannel


class SaleRepository:
    """Reads transaction headers, with the customer's display name attached."""

    def __init__(self, db: Session):
        self.db = db

    def header_query(self):
        return (
            self.db.query(
                Sale,
                Customer.first_name.label("customer_first_name"),
                Customer.last_name.label("customer_last_name"),
            )
            .select_from(Sale)
            .outerjoin(Customer, Customer.id == Sale.customer_id)
        )

    @staticmethod
    def from_row(row) -> SaleResponse:
        sale = row.Sale

        try:
            channel = SalesChannel(sale.sales_channel)
        except ValueError:
            raise RowMappingError(
                f"Sale {sale.id!r} has unknown sales channel {sale.sales_channel!r}"
            )

        name_parts = [row.customer_first_name, row.customer_last_name]
        customer_name = " ".join(part for part in name_parts if part) or None

        return SaleResponse(
            id=stored_uuid(sale.id, "sale id"),
            customer_id=stored_uuid(sale.customer_id, "customer id"),
            customer_name=customer_name,
            date_and_time=sale.date_and_time,
            sale_items=[],
            total_cents=sale.total_cents,
            discount=sale.discount,
            total_resolved=sale.total_resolved,
            sales_channel=channel,
            staff_responsible=stored_uuid(sale.staff_responsible, "staff id"),
            company_branch=sale.company_branch,
            car_number=sale.car_number,
            receipt_number=sale.receipt_number,
        )

    def get(self, sale_id: str):
        row = self.header_query().filter(Sale.id == sale_id).first()
        if row is None:
            return None
        return self.from_row(row)

    def list_all(self, filters: QueryFilter):
        rows = (
            filters.apply(self.header_query())
            .order_by(Sale.date_and_time.desc(), Sale.id.desc())
            .all()
        )
        return [self.from_row(row) for row in rows]

    def list_page(self, filters: QueryFilter, page: int, limit: int):
        query = filters.apply(self.header_query())
        rows = paginate(
            query.order_by(Sale.date_and_time.desc(), Sale.id.desc()),
            page,
            limit,
        ).all()
        return [self.from_row(row) for row in rows]
