"""Ticket Booking: seat grid booking service, gateway client and widget."""

__version__ = "1.0.0"
