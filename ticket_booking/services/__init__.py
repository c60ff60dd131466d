"""Business logic services for the Ticket Booking service."""

from .seat_service import SeatService

__all__ = ["SeatService"]
