"""HTTP middleware for the catalog API.

Every request gets a correlation ID that is echoed in the ``X-Request-ID``
response header, attached to error bodies and bound into the structlog
context. Exceptions no handler claimed are turned into a JSON 500.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with a correlation ID and log its outcome.

    A client-supplied ``X-Request-ID`` is reused; otherwise a UUID4 is
    generated. The ID is stored on ``request.state`` for the exception
    handlers.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id

        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response: Response | None = None
            try:
                response = await call_next(request)
            finally:
                status_code = response.status_code if response is not None else 500
                log = logger.warning if status_code >= 500 else logger.info
                log(
                    "Request completed",
                    method=request.method,
                    path=request.url.path,
                    query=str(request.query_params) or None,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )

        response.headers[self.HEADER_NAME] = request_id
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert exceptions that escaped the routers into a JSON 500.

    Domain errors and validation errors never reach this point; they are
    handled by the exception handlers registered on the app.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "details": [],
                    "request_id": getattr(request.state, "request_id", None),
                },
            )


def setup_middleware(app: FastAPI) -> None:
    """Install the catalog middleware stack.

    The last middleware added runs first, so the request ID is assigned
    before the error handler can need it.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
