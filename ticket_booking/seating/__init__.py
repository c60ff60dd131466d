"""Seat grid core: layout, seat store and allocation."""

from .layout import SeatLayout, DEFAULT_LAYOUT, to_seat_number
from .store import SeatStatus, SeatStore, reset
from .allocator import allocate, parse_request_count, validate_request_count

__all__ = [
    "SeatLayout",
    "DEFAULT_LAYOUT",
    "to_seat_number",
    "SeatStatus",
    "SeatStore",
    "reset",
    "allocate",
    "parse_request_count",
    "validate_request_count",
]
