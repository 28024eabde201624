"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, error handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.health import router as health_router
from app.api.middleware import setup_middleware
from app.api.products import router as products_router
from app.api.variants import router as variants_router
from app.domain.exceptions import (
    ConflictError,
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    StoreFailureError,
)
from app.infrastructure.config import settings
from app.infrastructure.database import engine
from app.infrastructure.logging import configure_logging

configure_logging(settings.log_level)

logger = structlog.get_logger()

# Domain error -> HTTP status
DOMAIN_ERROR_STATUS: dict[type[DomainError], int] = {
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreFailureError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting Catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    yield

    logger.info("Shutting down Catalog API")
    await engine.dispose()


app = FastAPI(
    title="Catalog API",
    description="Product and variant catalog API",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(variants_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _status_for(exc: DomainError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in DOMAIN_ERROR_STATUS:
            return DOMAIN_ERROR_STATUS[error_type]
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain errors to HTTP responses with consistent format."""
    request_id = getattr(request.state, "request_id", None)
    status_code = _status_for(exc)

    if isinstance(exc, StoreFailureError):
        logger.error(
            "Store failure",
            path=request.url.path,
            method=request.method,
            operation=exc.operation,
            cause=repr(exc.__cause__),
        )

    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": [
                {"field": key, "message": str(value)} for key, value in exc.details.items()
            ],
            "request_id": request_id,
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with one detail per invalid field."""
    request_id = getattr(request.state, "request_id", None)

    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": "Invalid input data provided",
            "details": details,
            "request_id": request_id,
        },
    )
