# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError

from spool_inventory.routers import (
    filament_router,
    location_router,
    printer_router,
    bundle_router,
    scan_router,
)

from spool_inventory.core.config import (
    APP_ENV,
    APP_NAME,
    APP_VERSION,
    CORS_ORIGINS,
    IS_PRODUCTION,
    STORE_PROFILE,
)
from spool_inventory.core.db import init_models
from spool_inventory.core.exceptions import AppException
from spool_inventory.core.logging import setup_logging
from spool_inventory.middleware.request_logging import request_logging_middleware
from spool_inventory.core.error_handlers import (
    app_exception_handler,
    validation_exception_handler,
    http_exception_handler,
    store_error_handler,
    unhandled_exception_handler,
)

# ------------------------------------------------------------------------------
# LOGGING
# ------------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# LIFESPAN
# ------------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application", extra={"env": APP_ENV, "profile": STORE_PROFILE})

    await init_models()
    logger.info("Bundle store ready")

    yield

    logger.info("Shutting down application")

# ------------------------------------------------------------------------------
# APP INIT
# ------------------------------------------------------------------------------
app = FastAPI(
    title=APP_NAME,
    description="Spool identity, storage location and printer bookkeeping",
    version=APP_VERSION,
    docs_url=None if IS_PRODUCTION else "/docs",
    redoc_url=None,
    lifespan=lifespan,
)

# ------------------------------------------------------------------------------
# EXCEPTION HANDLERS
# ------------------------------------------------------------------------------
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(SQLAlchemyError, store_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# ------------------------------------------------------------------------------
# MIDDLEWARE
# ------------------------------------------------------------------------------
app.middleware("http")(request_logging_middleware)

origins = [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ------------------------------------------------------------------------------
# HEALTH CHECK
# ------------------------------------------------------------------------------
@app.get("/", tags=["Health"])
async def health_check():
    return {
        "status": "ok",
        "service": "spool-inventory-api",
        "environment": APP_ENV,
        "version": APP_VERSION,
    }

# ------------------------------------------------------------------------------
# ROUTERS
# ------------------------------------------------------------------------------
app.include_router(filament_router)
app.include_router(location_router)
app.include_router(printer_router)
app.include_router(bundle_router)
app.include_router(scan_router)
