"""
Database models for the Ticket Booking service.
"""

from .base import Base
from .seat import Seat
from ..seating.store import SeatStatus

__all__ = [
    "Base",
    "Seat",
    "SeatStatus",
]
