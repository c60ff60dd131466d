"""
Seat booking widget state and actions.

The view keeps a local copy of the seat store. It is replaced only after the
gateway has confirmed a booking or reset, so the view never shows a booking
that was not saved.
"""

import logging
import time
from typing import Callable, List, Optional

from ..config import get_settings
from ..gateway import BookingGateway
from ..seating import (
    SeatLayout, SeatStatus, SeatStore, allocate, parse_request_count, to_seat_number
)
from ..utils.exceptions import AllocationError, GatewayFailureError, InvalidSeatStoreError
from .notifier import Notifier

logger = logging.getLogger(__name__)

LOAD_FAILED = "Error loading seat data. Please try again later."
BOOK_FAILED = "Failed to book seats. Please try again later."
RESET_DONE = "All bookings have been reset."
RESET_FAILED = "Failed to reset bookings."


class SeatBookingView:
    """Booking widget controller with a single busy guard."""

    def __init__(
        self,
        gateway: BookingGateway,
        notifier: Notifier,
        layout: Optional[SeatLayout] = None,
        success_message_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        settings = get_settings()
        self.gateway = gateway
        self.notifier = notifier
        self.layout = layout or SeatLayout.from_settings(settings)
        self.success_message_seconds = (
            success_message_seconds
            if success_message_seconds is not None
            else settings.success_message_seconds
        )
        self._clock = clock

        self.store = SeatStore.all_available(self.layout)
        self.is_busy = False
        self._success_message: Optional[str] = None
        self._success_expires_at = 0.0

    @property
    def booked_count(self) -> int:
        return self.store.booked_count

    @property
    def available_count(self) -> int:
        return self.store.available_count

    @property
    def success_message(self) -> Optional[str]:
        """The last booking confirmation, until it expires."""
        if self._success_message and self._clock() < self._success_expires_at:
            return self._success_message
        return None

    def _claim(self, action: str) -> bool:
        if self.is_busy:
            logger.info(f"Ignoring {action}: another request is still in flight")
            return False
        self.is_busy = True
        return True

    def _release(self) -> None:
        self.is_busy = False

    async def _fetch_store(self) -> SeatStore:
        statuses = await self.gateway.fetch_seats()
        return SeatStore.from_statuses(statuses, self.layout)

    async def load(self) -> bool:
        """Load seat statuses from the gateway."""
        if not self._claim("load"):
            return False
        try:
            self.store = await self._fetch_store()
            logger.info(
                f"Loaded seats: {self.booked_count} booked, {self.available_count} available"
            )
            return True
        except (GatewayFailureError, InvalidSeatStoreError) as e:
            logger.error(f"Loading seats failed: {e.message}")
            self.notifier.error(LOAD_FAILED)
            return False
        finally:
            self._release()

    async def book(self, raw_count) -> Optional[List[int]]:
        """
        Book seats for a request typed by the user.

        Args:
            raw_count: Requested number of seats, as text or an int

        Returns:
            The booked 1-based seat numbers, or None if nothing was booked
        """
        if not self._claim("book"):
            return None
        try:
            try:
                count = parse_request_count(raw_count, self.layout.max_per_request)
                indices = allocate(self.store, count)
            except AllocationError as e:
                logger.info(f"Booking request rejected: {e.message}")
                self.notifier.error(e.message)
                return None

            seat_numbers = [to_seat_number(index) for index in indices]
            try:
                await self.gateway.book_seats(seat_numbers)
            except GatewayFailureError as e:
                logger.error(f"Booking seats {seat_numbers} failed: {e.message}")
                self.notifier.error(BOOK_FAILED)
                return None

            self.store = self.store.with_booked(indices)
            message = f"Seat Booking Successful! Seats: {', '.join(str(n) for n in seat_numbers)}"
            self._success_message = message
            self._success_expires_at = self._clock() + self.success_message_seconds
            self.notifier.success(message)
            return seat_numbers
        finally:
            self._release()

    async def reset(self) -> bool:
        """Reset every booking, then refresh from the gateway."""
        if not self._claim("reset"):
            return False
        try:
            try:
                await self.gateway.reset_seats()
            except GatewayFailureError as e:
                logger.error(f"Resetting seats failed: {e.message}")
                self.notifier.error(RESET_FAILED)
                return False

            self.store = self.store.reset()
            self._success_message = None
            try:
                self.store = await self._fetch_store()
            except (GatewayFailureError, InvalidSeatStoreError) as e:
                logger.warning(f"Refreshing seats after reset failed: {e.message}")

            self.notifier.info(RESET_DONE)
            return True
        finally:
            self._release()

    def render(self) -> str:
        """Render the seat grid and counts as text.

        Available seats show their number, booked seats are wrapped in brackets.
        """
        width = len(str(self.layout.total_seats)) + 2
        lines = []
        for row in range(self.layout.rows):
            cells = []
            for index in self.layout.row_range(row):
                number = str(to_seat_number(index))
                if self.store[index] is SeatStatus.BOOKED:
                    cells.append(f"[{number}]".rjust(width))
                else:
                    cells.append(f" {number} ".rjust(width))
            lines.append(" ".join(cells))

        lines.append("")
        lines.append(f"Booked Seats = {self.booked_count}    Available Seats = {self.available_count}")

        banner = self.success_message
        if banner:
            lines.append(banner)

        return "\n".join(lines)
