from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from finance_tracker.api.middleware.error_handler import (
    handle_finance_error,
    handle_generic_error,
    handle_http_exception,
    handle_integrity_error,
    handle_validation_error,
)
from finance_tracker.api.middleware.logging import RequestLoggingMiddleware, setup_logging
from finance_tracker.api.v1 import router as v1_router
from finance_tracker.api.v1.health import router as health_router
from finance_tracker.config import settings
from finance_tracker.core.exceptions import FinanceTrackerError
from finance_tracker.db.session import async_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    yield
    # Shutdown
    await async_engine.dispose()


def create_app() -> FastAPI:
    setup_logging(settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="Finance Tracker API",
        description="Personal income/expense tracking with keyword auto-categorization",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(FinanceTrackerError, handle_finance_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    # Register routers
    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("finance_tracker.main:app", host=settings.host, port=settings.port)
