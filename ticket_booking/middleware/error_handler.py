"""
Error handling middleware for the Ticket Booking service.
"""

import logging
import traceback
from datetime import datetime, timezone
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import OperationalError, TimeoutError as SQLTimeoutError

from ..utils.exceptions import (
    TicketBookingError,
    ErrorCode,
    ExternalServiceError,
    ValidationError,
    NotFoundError,
    AllocationError,
)

logger = logging.getLogger(__name__)


STATUS_MAP = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_REQUEST_COUNT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.TOO_MANY_REQUESTED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INSUFFICIENT_SEATS: status.HTTP_409_CONFLICT,
    ErrorCode.SEAT_ALREADY_BOOKED: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_SEAT_STORE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.GATEWAY_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


def get_status_code_for_error(exc: TicketBookingError) -> int:
    """Map error codes to HTTP status codes."""
    return STATUS_MAP.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(
    exc: TicketBookingError,
    error_id: str,
    status_code: int,
    headers: dict | None = None,
    debug: dict | None = None
) -> JSONResponse:
    """Render an error in the API's JSON error envelope."""
    content = {
        "error": exc.to_dict(),
        "error_id": error_id,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
    if debug:
        content["debug"] = debug

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request body and parameter errors as VALIDATION_ERROR responses."""
    field_errors = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body") or "body"
        field_errors.setdefault(field, []).append(error["msg"])

    error = ValidationError("Request validation failed", field_errors=field_errors)
    error_id = str(uuid4())
    logger.warning(
        f"Client error [{error_id}]: {error.message}",
        extra={"error_id": error_id, "error_code": error.error_code.value, "details": error.details}
    )
    return error_response(error, error_id, get_status_code_for_error(error))


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers for errors FastAPI raises before a route runs."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware turning exceptions into structured JSON error responses."""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        """Process request and handle any exceptions."""
        error_id = str(uuid4())

        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc, error_id)

    def _handle_exception(self, request: Request, exc: Exception, error_id: str) -> JSONResponse:
        """Handle different types of exceptions and return appropriate responses."""
        self._log_error(request, exc, error_id)

        if isinstance(exc, TicketBookingError):
            return error_response(exc, error_id, get_status_code_for_error(exc))
        elif isinstance(exc, (OperationalError, SQLTimeoutError)):
            error = ExternalServiceError(
                "database",
                "Database service temporarily unavailable",
                details={"error_type": type(exc).__name__}
            )
            return error_response(
                error,
                error_id,
                status.HTTP_503_SERVICE_UNAVAILABLE,
                headers={"Retry-After": "30"}
            )
        else:
            error = TicketBookingError(
                "An unexpected error occurred",
                error_code=ErrorCode.INTERNAL_ERROR,
                details={"error_type": type(exc).__name__} if self.debug else None
            )
            # Include stack trace in debug mode
            debug = {"exception": str(exc), "traceback": traceback.format_exc()} if self.debug else None
            return error_response(
                error, error_id, status.HTTP_500_INTERNAL_SERVER_ERROR, debug=debug
            )

    def _log_error(self, request: Request, exc: Exception, error_id: str):
        """Log error with request context."""
        request_info = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None,
        }

        if isinstance(exc, (ValidationError, NotFoundError, AllocationError)):
            logger.warning(
                f"Client error [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        elif isinstance(exc, TicketBookingError):
            logger.error(
                f"Business error [{error_id}]: {exc.message}",
                extra={
                    "error_id": error_id,
                    "error_code": exc.error_code.value,
                    "request": request_info,
                    "details": exc.details
                }
            )
        else:
            logger.error(
                f"Unexpected error [{error_id}]: {str(exc)}",
                extra={
                    "error_id": error_id,
                    "error_type": type(exc).__name__,
                    "request": request_info,
                },
                exc_info=exc
            )
