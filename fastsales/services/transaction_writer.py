# =========================================================
# TRANSACTION WRITER
#
# - A transaction (header + every line) is written in one
#   database transaction: all of it is visible or none is
# - Each line snapshots the live product name and price
# - Header totals are stored as given, never recomputed
#   from the lines
# - Legacy single-line writes skip the header entirely
# =========================================================

import logging
import uuid
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from fastsales.core.auth import StaffIdentity
from fastsales.core.context import LedgerContext
from fastsales.core.errors import LedgerError, NotFoundError, StorageError
from fastsales.models.sale_items import SaleItem
from fastsales.models.sales import Sale
from fastsales.repositories.base import to_uuid
from fastsales.repositories.catalog import ProductCatalog
from fastsales.repositories.sale_lines import SaleLineRepository
from fastsales.repositories.sales import SaleRepository
from fastsales.schemas.sale import SaleCreate, SaleLineCreate, SaleLineUpdate
from fastsales.services.snapshot import LineItemSnapshotResolver

logger = logging.getLogger(__name__)


def _optional_id(value):
    return str(value) if value is not None else None


class TransactionWriter:
    def __init__(self, ctx: LedgerContext, snapshots=None):
        self.db = ctx.db
        self.clock = ctx.clock
        self.snapshots = snapshots or LineItemSnapshotResolver(ProductCatalog(ctx.db))
        self.lines = SaleLineRepository(ctx.db)
        self.sales = SaleRepository(ctx.db)

    def _local_time(self, value: datetime) -> datetime:
        # Aware timestamps are stored as reference-zone wall clock time
        # so that day bucketing matches the server's calendar
        if value.tzinfo is not None:
            return value.astimezone(self.clock.tz).replace(tzinfo=None)
        return value

    def _line_fields(self, item, date_of_sale: datetime) -> dict:
        snapshot = self.snapshots.resolve(item.product_id)

        return {
            "product_id": str(item.product_id),
            "customer_id": _optional_id(item.customer_id),
            "date_of_sale": self._local_time(date_of_sale),
            "quantity": item.quantity,
            "discount": item.discount,
            "total_cents": item.total_cents,
            "total_resolved": item.total_resolved,
            "note": item.note,
            "product_name": snapshot.product_name,
            "price_per_item": snapshot.price_per_item,
        }

    # =========================================================
    # MULTI-LINE TRANSACTION
    # =========================================================
    def create_transaction(self, sale_data: SaleCreate, staff: StaffIdentity):
        sale_id = str(uuid.uuid4())
        staff_responsible = sale_data.staff_responsible or staff.staff_id

        try:
            sale = Sale(
                id=sale_id,
                customer_id=_optional_id(sale_data.customer_id),
                date_and_time=self._local_time(sale_data.date_and_time),
                total_cents=sale_data.total_cents,
                discount=sale_data.discount,
                total_resolved=sale_data.total_resolved,
                sales_channel=sale_data.sales_channel.value,
                staff_responsible=str(staff_responsible),
                company_branch=sale_data.company_branch,
                car_number=sale_data.car_number,
                receipt_number=sale_data.receipt_number,
            )
            self.db.add(sale)
            self.db.flush()

            for line_number, item in enumerate(sale_data.sale_items, start=1):
                fields = self._line_fields(
                    item,
                    item.date_of_sale or sale_data.date_and_time,
                )
                self.db.add(
                    SaleItem(
                        id=str(uuid.uuid4()),
                        sale_id=sale_id,
                        line_number=line_number,
                        **fields,
                    )
                )
                self.db.flush()

            # Read back inside the transaction so the response carries the
            # stored snapshots rather than the request body
            header = self.sales.get(sale_id)
            items = self.lines.list_for_sale(sale_id)

            self.db.commit()

        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception(f"Sale {sale_id} rolled back")
            raise StorageError("Unable to record sale") from exc

        except LedgerError:
            self.db.rollback()
            raise

        logger.info(f"Sale {sale_id} recorded with {len(items)} line(s)")

        return header.model_copy(update={"sale_items": items})

    def delete_transaction(self, sale_id) -> None:
        sale_key = str(to_uuid(sale_id, "sale id"))

        try:
            self.db.query(SaleItem).filter(SaleItem.sale_id == sale_key).delete(
                synchronize_session=False
            )
            deleted = self.db.query(Sale).filter(Sale.id == sale_key).delete(
                synchronize_session=False
            )

            if deleted == 0:
                self.db.rollback()
                raise NotFoundError("Sale", sale_key)

            self.db.commit()

        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Unable to delete sale") from exc

        logger.info(f"Sale {sale_key} deleted")

    # =========================================================
    # LEGACY SINGLE LINE
    # =========================================================
    def create_line(self, line_data: SaleLineCreate):
        line_id = str(uuid.uuid4())

        sale_key = _optional_id(line_data.sale_id)

        try:
            fields = self._line_fields(line_data, line_data.date_of_sale)

            # Attached lines go after the ones already on the transaction
            if sale_key is not None:
                fields["line_number"] = self.lines.next_line_number(sale_key)

            self.db.add(SaleItem(id=line_id, sale_id=sale_key, **fields))
            self.db.commit()

        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Unable to record sale line") from exc

        return self.lines.get(line_id)

    def update_line(self, line_id, line_data: SaleLineUpdate):
        line_key = str(to_uuid(line_id, "sale line id"))

        try:
            fields = self._line_fields(line_data, line_data.date_of_sale)
            updated = (
                self.db.query(SaleItem)
                .filter(SaleItem.id == line_key)
                .update(fields, synchronize_session=False)
            )

            if updated == 0:
                self.db.rollback()
                raise NotFoundError("Sale line", line_key)

            self.db.commit()

        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Unable to update sale line") from exc

        return self.lines.get(line_key)

    def delete_line(self, line_id) -> None:
        line_key = str(to_uuid(line_id, "sale line id"))

        # The parent header keeps its stored totals
        try:
            deleted = (
                self.db.query(SaleItem)
                .filter(SaleItem.id == line_key)
                .delete(synchronize_session=False)
            )

            if deleted == 0:
                self.db.rollback()
                raise NotFoundError("Sale line", line_key)

            self.db.commit()

        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError("Unable to delete sale line") from exc

        logger.info(f"Sale line {line_key} deleted")
