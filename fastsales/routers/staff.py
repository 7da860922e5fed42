# fastsales/routers/staff.py

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query

from fastsales.core.auth import StaffIdentity, get_current_staff
from fastsales.routers.reports import get_aggregator
from fastsales.schemas.sale import SaleResponse
from fastsales.services.report_aggregator import ReportAggregator

router = APIRouter(
    prefix="/staff",
    tags=["Staff Transactions"],
)


# Not paginated: every matching header in the window
@router.get("/{staff_id}/transactions", response_model=list[SaleResponse])
def staff_transactions(
    staff_id: uuid.UUID,
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    aggregator: ReportAggregator = Depends(get_aggregator),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return aggregator.staff_transactions(staff_id, start_date, end_date)
