"""Helpers shared by the test modules."""

from typing import Iterable

from ticket_booking.seating import SeatLayout, SeatStatus, SeatStore
from ticket_booking.utils.exceptions import GatewayFailureError


def store_with_available(available: Iterable[int], layout: SeatLayout = SeatLayout()) -> SeatStore:
    """Build a store where only the given 0-based indices are available."""
    available = set(available)
    return SeatStore(
        tuple(
            SeatStatus.AVAILABLE if index in available else SeatStatus.BOOKED
            for index in range(layout.total_seats)
        ),
        layout,
    )


class FakeGateway:
    """In-memory gateway with switchable failures."""

    def __init__(self, layout=SeatLayout()):
        self.statuses = [SeatStatus.AVAILABLE] * layout.total_seats
        self.fail_fetch = False
        self.fail_book = False
        self.fail_reset = False
        self.book_calls = []
        self.reset_calls = 0
        self.gate = None

    def only_available(self, indices):
        indices = set(indices)
        self.statuses = [
            SeatStatus.AVAILABLE if i in indices else SeatStatus.BOOKED
            for i in range(len(self.statuses))
        ]

    async def fetch_seats(self):
        if self.fail_fetch:
            raise GatewayFailureError("fetch_seats", "service down")
        return list(self.statuses)

    async def book_seats(self, seat_numbers):
        self.book_calls.append(list(seat_numbers))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_book:
            raise GatewayFailureError("book_seats", "service down", status_code=503)
        for number in seat_numbers:
            self.statuses[number - 1] = SeatStatus.BOOKED
        return list(seat_numbers)

    async def reset_seats(self):
        self.reset_calls += 1
        if self.fail_reset:
            raise GatewayFailureError("reset_seats", "service down")
        self.statuses = [SeatStatus.AVAILABLE] * len(self.statuses)
