# =========================================================
# REPORTS ROUTER
#
# - Today: resolved total + line count
# - Week: daily series from this Monday through today
# - Top products (max 20) and per-product summary over an
#   optional date window (defaults: 1st of month -> today)
# =========================================================

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fastsales.core.auth import StaffIdentity, get_current_staff
from fastsales.core.context import LedgerContext, get_context
from fastsales.schemas.report import (
    DailySales,
    ProductSalesSummary,
    SalesStats,
    TopProduct,
)
from fastsales.services.report_aggregator import ReportAggregator

router = APIRouter(prefix="/sales/stats", tags=["Reports"])


def get_aggregator(ctx: LedgerContext = Depends(get_context)) -> ReportAggregator:
    return ReportAggregator(ctx)


@router.get("/today", response_model=SalesStats)
def today_sales(
    aggregator: ReportAggregator = Depends(get_aggregator),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return aggregator.today_summary()


@router.get("/week", response_model=list[DailySales])
def weekly_sales(
    aggregator: ReportAggregator = Depends(get_aggregator),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return aggregator.weekly_trend()


@router.get("/top_products", response_model=list[TopProduct])
def top_products(
    start_date: Optional[str] = Query(None, description="Start date YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="End date YYYY-MM-DD"),
    aggregator: ReportAggregator = Depends(get_aggregator),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return aggregator.top_products(start_date, end_date)


@router.get("/by_product", response_model=list[ProductSalesSummary])
def sales_by_product(
    start_date: Optional[str] = Query(None, description="Start date YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="End date YYYY-MM-DD"),
    aggregator: ReportAggregator = Depends(get_aggregator),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return aggregator.sales_by_product(start_date, end_date)
