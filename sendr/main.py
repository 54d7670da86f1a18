# sendr/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sendr.core.config import get_settings
from sendr.core.exceptions import (
    BaseServiceError,
    ConflictError,
    InsufficientStockError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
)
from sendr.core.logging_config import configure_logging
from sendr.database import create_tables
from sendr.routes import browse, health, orders, products, shops, vendor

logger = logging.getLogger(__name__)

settings = get_settings()

# Most specific first; the first isinstance match wins
ERROR_STATUS_CODES = [
    (InvalidArgumentError, 400),
    (NotFoundError, 404),
    (InsufficientStockError, 409),
    (ConflictError, 409),
    (StoreUnavailableError, 503),
]


def status_code_for(exc: BaseServiceError) -> int:
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    if settings.CREATE_TABLES_ON_STARTUP:
        logger.info("Creating missing tables...")
        await create_tables()
    logger.info("Sendr storefront started (%s)", settings.ENVIRONMENT)
    yield


app = FastAPI(
    title="Sendr Storefront",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BaseServiceError)
async def service_error_handler(request: Request, exc: BaseServiceError):
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


app.include_router(health.router)
app.include_router(shops.router)
app.include_router(products.router)
app.include_router(browse.router)
app.include_router(orders.router)
app.include_router(vendor.router)
