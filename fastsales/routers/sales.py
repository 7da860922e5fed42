# =========================================================
# SALE LINES ROUTER (LEGACY FLAT VIEW)
#
# Single sale lines, with or without a parent transaction.
# The list pairs one page of lines with the total of every
# line in the date window, so the total does not move when
# paging.
# =========================================================

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from fastsales.core.auth import StaffIdentity, get_current_staff
from fastsales.core.rate_limiter import limiter
from fastsales.routers.sales_transactions import get_reader, get_writer
from fastsales.schemas.sale import (
    SaleItemResponse,
    SaleLineCreate,
    SaleLineUpdate,
    SalesItemsListResponse,
)
from fastsales.services.ledger_reader import SalesLedgerReader
from fastsales.services.transaction_writer import TransactionWriter

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get("", response_model=SalesItemsListResponse)
def list_sales(
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    reader: SalesLedgerReader = Depends(get_reader),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return reader.list_lines(
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )


@router.post("", response_model=SaleItemResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("60/minute")
def create_sale(
    request: Request,
    line_data: SaleLineCreate,
    writer: TransactionWriter = Depends(get_writer),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return writer.create_line(line_data)


@router.get("/{line_id}", response_model=SaleItemResponse)
def get_sale(
    line_id: uuid.UUID,
    reader: SalesLedgerReader = Depends(get_reader),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return reader.get_line(line_id)


@router.put("/{line_id}", response_model=SaleItemResponse)
@limiter.limit("60/minute")
def update_sale(
    request: Request,
    line_id: uuid.UUID,
    line_data: SaleLineUpdate,
    writer: TransactionWriter = Depends(get_writer),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return writer.update_line(line_id, line_data)


@router.delete("/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sale(
    line_id: uuid.UUID,
    writer: TransactionWriter = Depends(get_writer),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    writer.delete_line(line_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
