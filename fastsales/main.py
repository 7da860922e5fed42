# Main application file



import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from fastsales.database import engine, Base
from fastsales.core.rate_limiter import limiter
from fastsales.core.config import settings
from fastsales.core.errors import (
    MalformedReferenceError,
    NotFoundError,
    RowMappingError,
    StorageError,
    internal_error_handler,
    malformed_reference_handler,
    not_found_handler,
)
from fastsales.models import customers, products, sale_items, sales as sale_models  # noqa: F401
from fastsales.routers import (
    reports,
    sales,
    sales_transactions,
    staff,
)


# LOGGING CONFIGURATION

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)

logger = logging.getLogger("fastsales")


# SCHEMA

Base.metadata.create_all(bind=engine)


# APP INIT

app = FastAPI(
    title="FastSales Back Office API",
    description="Sales ledger and revenue reporting for retail point-of-sale staff",
    version="1.0.0",
)



# CORS (Token-based auth)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# RATE LIMITING

app.state.limiter = limiter
app.add_exception_handler(
    RateLimitExceeded,
    _rate_limit_exceeded_handler
)


# LEDGER ERRORS

app.add_exception_handler(NotFoundError, not_found_handler)
app.add_exception_handler(MalformedReferenceError, malformed_reference_handler)
app.add_exception_handler(RowMappingError, internal_error_handler)
app.add_exception_handler(StorageError, internal_error_handler)
app.add_exception_handler(SQLAlchemyError, internal_error_handler)


# REQUEST LOGGING MIDDLEWARE

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    duration = round((time.time() - start_time) * 1000, 2)

    logger.info(
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Time: {duration}ms"
    )

    return response


# ROUTERS

app.include_router(reports.router, prefix="/api")
app.include_router(sales_transactions.router, prefix="/api")
app.include_router(sales.router, prefix="/api")
app.include_router(staff.router, prefix="/api")



# ROOT

@app.get("/")
def root():
    logger.info("Health check endpoint called")
    return {"message": "FastSales Back Office API is running"}
