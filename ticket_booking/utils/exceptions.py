"""
Custom exceptions for the Ticket Booking service.
"""

from typing import Any, Dict, Optional, List, Sequence
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the platform."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Allocation errors
    INVALID_REQUEST_COUNT = "INVALID_REQUEST_COUNT"
    TOO_MANY_REQUESTED = "TOO_MANY_REQUESTED"
    INSUFFICIENT_SEATS = "INSUFFICIENT_SEATS"

    # Seat state errors
    SEAT_ALREADY_BOOKED = "SEAT_ALREADY_BOOKED"
    INVALID_SEAT_STORE = "INVALID_SEAT_STORE"

    # External service errors
    GATEWAY_FAILURE = "GATEWAY_FAILURE"


class TicketBookingError(Exception):
    """Base exception class for the ticket booking service."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """Initialize the exception with comprehensive error information."""
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        if self.suggestions:
            result["suggestions"] = self.suggestions

        return result


class ValidationError(TicketBookingError):
    """Exception raised for validation errors."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[Dict[str, List[str]]] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        super().__init__(
            message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"field_errors": field_errors} if field_errors else details,
            **kwargs
        )
        self.field_errors = field_errors or {}


class NotFoundError(TicketBookingError):
    """Base exception for resource not found errors."""

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_id: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.NOT_FOUND,
            details={"resource_type": resource_type, "resource_id": resource_id} if resource_type else None,
            **kwargs
        )


class SeatNotFoundError(NotFoundError):
    """Exception raised when one or more seat numbers do not exist."""

    def __init__(self, seat_numbers: Sequence[int], **kwargs):
        numbers = ", ".join(str(number) for number in seat_numbers)
        super().__init__(
            f"Seat(s) {numbers} not found",
            resource_type="seat",
            resource_id=numbers,
            suggestions=["Refresh the seat map", "Seat numbers start at 1"],
            **kwargs
        )
        self.seat_numbers = list(seat_numbers)


class BusinessLogicError(TicketBookingError):
    """Base exception for business logic violations."""
    pass


class AllocationError(BusinessLogicError):
    """Base exception for a booking request the allocator cannot satisfy."""
    pass


class InvalidRequestCountError(AllocationError):
    """Exception raised when the requested seat count is not a positive integer."""

    def __init__(self, value: Any, **kwargs):
        super().__init__(
            "Please enter a valid number of seats.",
            error_code=ErrorCode.INVALID_REQUEST_COUNT,
            details={"value": repr(value)},
            **kwargs
        )
        self.value = value


class TooManyRequestedError(AllocationError):
    """Exception raised when more seats are requested than fit in one row."""

    def __init__(self, requested: int, limit: int, **kwargs):
        super().__init__(
            f"You can book a maximum of {limit} seats at a time.",
            error_code=ErrorCode.TOO_MANY_REQUESTED,
            details={"requested": requested, "limit": limit},
            suggestions=[f"Split the request into bookings of at most {limit} seats"],
            **kwargs
        )
        self.requested = requested
        self.limit = limit


class InsufficientSeatsError(AllocationError):
    """Exception raised when fewer seats are available than requested."""

    def __init__(self, requested: int, available: int, **kwargs):
        super().__init__(
            "Not enough seats available to fulfill your booking.",
            error_code=ErrorCode.INSUFFICIENT_SEATS,
            details={"requested": requested, "available": available},
            suggestions=["Try booking fewer seats"],
            **kwargs
        )
        self.requested = requested
        self.available = available


class SeatAlreadyBookedError(BusinessLogicError):
    """Exception raised when trying to book an already booked seat."""

    def __init__(self, seat_numbers: Sequence[int], **kwargs):
        numbers = ", ".join(str(number) for number in seat_numbers)
        super().__init__(
            f"Seat(s) {numbers} already booked",
            error_code=ErrorCode.SEAT_ALREADY_BOOKED,
            details={"seat_numbers": list(seat_numbers)},
            suggestions=["Choose different seats", "Refresh seat availability"],
            **kwargs
        )
        self.seat_numbers = list(seat_numbers)


class InvalidSeatStoreError(TicketBookingError):
    """Exception raised when seat statuses do not form a valid seat store."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            error_code=ErrorCode.INVALID_SEAT_STORE,
            **kwargs
        )


class ExternalServiceError(TicketBookingError):
    """Exception raised for external service failures."""

    def __init__(
        self,
        service_name: str,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        kwargs.setdefault("error_code", ErrorCode.INTERNAL_ERROR)
        kwargs.setdefault("suggestions", ["Try again later", "Contact support if problem persists"])
        super().__init__(
            f"{service_name} service error: {message}",
            details={"service_name": service_name, "status_code": status_code, **(details or {})},
            **kwargs
        )
        self.service_name = service_name
        self.status_code = status_code


class GatewayFailureError(ExternalServiceError):
    """Exception raised when a booking gateway call does not succeed."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(
            "booking gateway",
            f"{operation} failed: {message}",
            status_code=status_code,
            error_code=ErrorCode.GATEWAY_FAILURE,
            **kwargs
        )
        self.operation = operation
