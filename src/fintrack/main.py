from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from fintrack.api.middleware.error_handler import (
    handle_fintrack_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from fintrack.api.middleware.logging import RequestLoggingMiddleware
from fintrack.api.v1 import router as v1_router
from fintrack.api.v1.health import router as health_router
from fintrack.config import settings
from fintrack.core.exceptions import FintrackError
from fintrack.core.logging_setup import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.log_level, json_format=settings.log_json)
    yield
    # Shutdown


def create_app() -> FastAPI:
    app = FastAPI(
        title="FinTrack API",
        description="Bank SMS ingestion, fraud scoring and monthly ledgers",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (most specific first)
    app.add_exception_handler(FintrackError, handle_fintrack_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
