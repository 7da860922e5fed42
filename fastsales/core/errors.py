# =========================================================
# LEDGER ERRORS
#
# Raised by the ledger components, translated to HTTP
# responses by the handlers registered in fastsales.main
# =========================================================

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """Base class for every error raised by the sales ledger."""


class NotFoundError(LedgerError):
    def __init__(self, entity: str, identifier=None):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found")


class MalformedReferenceError(LedgerError):
    """A caller supplied an id string that is not a UUID."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r}")


class RowMappingError(LedgerError):
    """A stored row could not be turned into an entity."""


class StorageError(LedgerError):
    """Connection, constraint or I/O failure in the storage layer."""


# =========================================================
# EXCEPTION HANDLERS
# =========================================================
def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


def malformed_reference_handler(request: Request, exc: MalformedReferenceError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


def internal_error_handler(request: Request, exc: Exception):
    logger.error(
        f"{request.method} {request.url.path} failed: "
        f"{exc.__class__.__name__}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal storage failure"},
    )
