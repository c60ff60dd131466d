"""Client side of the booking gateway."""

from .client import BookingGateway

__all__ = ["BookingGateway"]
