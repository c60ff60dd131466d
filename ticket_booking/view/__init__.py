"""Seat booking widget: state, notifications and rendering."""

from .booking_view import SeatBookingView
from .notifier import Notifier, ConsoleNotifier, RecordingNotifier

__all__ = ["SeatBookingView", "Notifier", "ConsoleNotifier", "RecordingNotifier"]
