# fastsales/services/ledger_reader.py

from typing import Optional

from fastsales.core.context import LedgerContext
from fastsales.core.errors import NotFoundError
from fastsales.models.customers import Customer
from fastsales.models.sale_items import SaleItem
from fastsales.models.sales import Sale
from fastsales.repositories.base import QueryFilter, to_uuid
from fastsales.repositories.sale_lines import SaleLineRepository
from fastsales.repositories.sales import SaleRepository
from fastsales.schemas.sale import SalesItemsListResponse
from fastsales.services.date_range import DateRangeResolver


class SalesLedgerReader:
    """Read paths over recorded sales.

    Transaction lists carry headers only; a single transaction fetch
    carries its resolved lines. The flat line list pairs one page of lines
    with the total of every line in the filtered window.
    """

    def __init__(self, ctx: LedgerContext):
        self.sales = SaleRepository(ctx.db)
        self.lines = SaleLineRepository(ctx.db)
        self.dates = DateRangeResolver(ctx.clock)

    def get_transaction(self, sale_id):
        sale_key = str(to_uuid(sale_id, "sale id"))

        header = self.sales.get(sale_key)
        if header is None:
            raise NotFoundError("Sale", sale_key)

        items = self.lines.list_for_sale(sale_key)
        return header.model_copy(update={"sale_items": items})

    def list_transactions(
        self,
        query: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ):
        # No total count is returned, callers page until a short page
        filters = (
            QueryFilter()
            .contains_text(
                query,
                Customer.first_name,
                Customer.last_name,
                Sale.receipt_number,
            )
            .between_days(Sale.date_and_time, start_date, end_date)
        )

        return self.sales.list_page(filters, page, limit)

    def get_line(self, line_id):
        line_key = str(to_uuid(line_id, "sale line id"))

        line = self.lines.get(line_key)
        if line is None:
            raise NotFoundError("Sale line", line_key)

        return line

    def list_lines(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> SalesItemsListResponse:
        window = self.dates.resolve(start_date, end_date)
        filters = QueryFilter().between_days(SaleItem.date_of_sale, window.start, window.end)

        return SalesItemsListResponse(
            sales=self.lines.list_page(filters, page, limit),
            total_sales_period_cents=self.lines.period_total(filters),
        )
