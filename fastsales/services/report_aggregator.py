# =========================================================
# REPORT AGGREGATOR
#
# Summaries over recorded sale lines and headers:
# - Today: resolved total + line count for the current day
# - Week: one bucket per day from this Monday to today,
#   zero-filled where nothing was sold
# - Top products / by product: grouped by current catalog name
# - Staff: every header handled by one staff member
#
# Empty windows give zeros or empty lists, never errors
# =========================================================

import datetime
from datetime import timedelta
from typing import Optional

from sqlalchemy import func

from fastsales.core.context import LedgerContext
from fastsales.models.products import Product
from fastsales.models.sale_items import SaleItem
from fastsales.models.sales import Sale
from fastsales.repositories.base import QueryFilter, to_uuid
from fastsales.repositories.sales import SaleRepository
from fastsales.schemas.report import (
    DailySales,
    ProductSalesSummary,
    SalesStats,
    TopProduct,
)
from fastsales.services.date_range import DateRangeResolver

TOP_PRODUCTS_LIMIT = 20


def _as_date(value) -> datetime.date:
    # SQLite hands back date() results as text
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value))


class ReportAggregator:
    def __init__(self, ctx: LedgerContext):
        self.db = ctx.db
        self.clock = ctx.clock
        self.dates = DateRangeResolver(ctx.clock)
        self.sales = SaleRepository(ctx.db)

    # =========================================================
    # TODAY
    # =========================================================
    def today_summary(self) -> SalesStats:
        today = self.clock.today()

        filters = QueryFilter().on_day(SaleItem.date_of_sale, today.isoformat())

        total, count = filters.apply(
            self.db.query(
                func.coalesce(func.sum(SaleItem.total_resolved), 0),
                func.count(SaleItem.id),
            )
        ).one()

        return SalesStats(
            total_sales_cents=int(total or 0),
            count=int(count or 0),
        )

    # =========================================================
    # CURRENT WEEK (MONDAY -> TODAY)
    # =========================================================
    def weekly_trend(self):
        today = self.clock.today()
        monday = today - timedelta(days=today.weekday())

        day = func.date(SaleItem.date_of_sale).label("day")
        filters = QueryFilter().between_days(
            SaleItem.date_of_sale,
            monday.isoformat(),
            today.isoformat(),
        )

        rows = (
            filters.apply(
                self.db.query(
                    day,
                    func.coalesce(func.sum(SaleItem.total_resolved), 0).label("total"),
                    func.count(SaleItem.id).label("count"),
                )
            )
            .group_by(day)
            .all()
        )

        totals = {
            _as_date(row.day): (int(row.total or 0), int(row.count or 0))
            for row in rows
        }

        buckets = []
        current = monday

        while current <= today:
            total, count = totals.get(current, (0, 0))
            buckets.append(
                DailySales(date=current, total_sales_cents=total, count=count)
            )
            current += timedelta(days=1)

        return buckets

    # =========================================================
    # PRODUCT REPORTS
    # =========================================================
    def _product_query(self, *columns, start_date=None, end_date=None):
        window = self.dates.resolve(start_date, end_date)

        filters = QueryFilter().between_days(
            SaleItem.date_of_sale, window.start, window.end
        )

        # Grouped by the current catalog name: renamed products report under
        # their new name and lines whose product is gone drop out
        return (
            filters.apply(
                self.db.query(Product.name.label("product_name"), *columns)
                .select_from(SaleItem)
                .join(Product, Product.id == SaleItem.product_id)
            )
            .group_by(Product.name)
        )

    def top_products(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ):
        total = func.coalesce(func.sum(SaleItem.total_resolved), 0)

        rows = (
            self._product_query(
                total.label("total"),
                start_date=start_date,
                end_date=end_date,
            )
            .order_by(total.desc())
            .limit(TOP_PRODUCTS_LIMIT)
            .all()
        )

        return [
            TopProduct(
                product_name=row.product_name,
                total_sales_cents=int(row.total or 0),
            )
            for row in rows
        ]

    def sales_by_product(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ):
        amount = func.coalesce(func.sum(SaleItem.total_resolved), 0)

        rows = (
            self._product_query(
                func.coalesce(func.sum(SaleItem.quantity), 0).label("total_quantity"),
                amount.label("total_amount"),
                start_date=start_date,
                end_date=end_date,
            )
            .order_by(amount.desc())
            .all()
        )

        return [
            ProductSalesSummary(
                product_name=row.product_name,
                total_quantity=int(row.total_quantity or 0),
                total_amount_cents=int(row.total_amount or 0),
            )
            for row in rows
        ]

    # =========================================================
    # STAFF
    # =========================================================
    def staff_transactions(
        self,
        staff_id,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ):
        staff_key = str(to_uuid(staff_id, "staff id"))
        window = self.dates.resolve(start_date, end_date)

        filters = (
            QueryFilter()
            .add(Sale.staff_responsible == staff_key)
            .between_days(Sale.date_and_time, window.start, window.end)
        )

        return self.sales.list_all(filters)
