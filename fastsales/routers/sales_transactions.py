# =========================================================
# SALES TRANSACTIONS ROUTER
#
# A transaction is one checkout: a header plus its lines,
# recorded together or not at all.
#
# - List view returns headers only
# - Single fetch returns the header with resolved lines
# =========================================================

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from fastsales.core.auth import StaffIdentity, get_current_staff
from fastsales.core.context import LedgerContext, get_context
from fastsales.core.rate_limiter import limiter
from fastsales.schemas.sale import SaleCreate, SaleResponse
from fastsales.services.ledger_reader import SalesLedgerReader
from fastsales.services.transaction_writer import TransactionWriter

router = APIRouter(prefix="/sales_transactions", tags=["Sales"])


def get_writer(ctx: LedgerContext = Depends(get_context)) -> TransactionWriter:
    return TransactionWriter(ctx)


def get_reader(ctx: LedgerContext = Depends(get_context)) -> SalesLedgerReader:
    return SalesLedgerReader(ctx)


# =========================================================
# CREATE TRANSACTION
# =========================================================
@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_sales_transaction(
    request: Request,
    sale_data: SaleCreate,
    writer: TransactionWriter = Depends(get_writer),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return writer.create_transaction(sale_data, current_staff)


# =========================================================
# LIST TRANSACTIONS
# =========================================================
@router.get("", response_model=list[SaleResponse])
def list_sales_transactions(
    query: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    reader: SalesLedgerReader = Depends(get_reader),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return reader.list_transactions(
        query=query,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )


# =========================================================
# GET SINGLE TRANSACTION
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sales_transaction(
    sale_id: uuid.UUID,
    reader: SalesLedgerReader = Depends(get_reader),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    return reader.get_transaction(sale_id)


# =========================================================
# DELETE TRANSACTION
# =========================================================
@router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sales_transaction(
    sale_id: uuid.UUID,
    writer: TransactionWriter = Depends(get_writer),
    current_staff: StaffIdentity = Depends(get_current_staff),
):
    writer.delete_transaction(sale_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
