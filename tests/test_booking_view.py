"""Tests for the booking widget controller."""

import asyncio
import io

import pytest

from ticket_booking.seating import SeatLayout
from ticket_booking.view import ConsoleNotifier, Notifier, RecordingNotifier, SeatBookingView
from ticket_booking.view.booking_view import BOOK_FAILED, LOAD_FAILED, RESET_DONE, RESET_FAILED

from helpers import FakeGateway


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def view(gateway, notifier, clock):
    return SeatBookingView(
        gateway, notifier, layout=SeatLayout(), success_message_seconds=3.0, clock=clock
    )


class TestLoad:

    async def test_load_copies_gateway_statuses(self, view, gateway):
        gateway.only_available(range(10))

        assert await view.load() is True

        assert view.available_count == 10
        assert view.booked_count == 67

    async def test_load_failure_keeps_previous_store(self, view, gateway, notifier):
        gateway.fail_fetch = True

        assert await view.load() is False

        assert view.available_count == 77
        assert notifier.of_kind("error") == [LOAD_FAILED]
        assert view.is_busy is False

    async def test_load_rejects_wrong_grid_size(self, view, gateway, notifier):
        gateway.statuses = gateway.statuses[:70]

        assert await view.load() is False

        assert len(view.store) == 77
        assert notifier.of_kind("error") == [LOAD_FAILED]


class TestBook:

    async def test_books_and_commits_after_confirmation(self, view, gateway, notifier):
        await view.load()

        booked = await view.book("5")

        assert booked == [1, 2, 3, 4, 5]
        assert gateway.book_calls == [[1, 2, 3, 4, 5]]
        assert view.booked_count == 5
        assert notifier.of_kind("success") == ["Seat Booking Successful! Seats: 1, 2, 3, 4, 5"]

    async def test_books_across_rows(self, view, gateway):
        gateway.only_available([0, 1, 7, 8, 9])
        await view.load()

        assert await view.book(4) == [1, 2, 8, 9]
        assert view.available_count == 1

    @pytest.mark.parametrize("raw", ["", "abc", "0", "-3"])
    async def test_invalid_count(self, view, gateway, notifier, raw):
        assert await view.book(raw) is None

        assert notifier.of_kind("error") == ["Please enter a valid number of seats."]
        assert gateway.book_calls == []

    async def test_too_many(self, view, gateway, notifier):
        assert await view.book("8") is None

        assert notifier.of_kind("error") == ["You can book a maximum of 7 seats at a time."]
        assert gateway.book_calls == []

    async def test_insufficient(self, view, gateway, notifier):
        gateway.only_available([3, 60])
        await view.load()

        assert await view.book("3") is None

        assert notifier.of_kind("error") == ["Not enough seats available to fulfill your booking."]
        assert gateway.book_calls == []
        assert view.available_count == 2

    async def test_gateway_failure_leaves_store_unchanged(self, view, gateway, notifier):
        gateway.fail_book = True

        assert await view.book("2") is None

        assert gateway.book_calls == [[1, 2]]
        assert view.booked_count == 0
        assert view.success_message is None
        assert notifier.of_kind("error") == [BOOK_FAILED]
        assert view.is_busy is False

    async def test_view_stays_usable_after_failure(self, view, gateway):
        gateway.fail_book = True
        await view.book("2")
        gateway.fail_book = False

        assert await view.book("2") == [1, 2]

    async def test_success_message_expires(self, view, clock):
        await view.book("1")

        assert view.success_message == "Seat Booking Successful! Seats: 1"
        clock.now += 2.9
        assert view.success_message is not None
        clock.now += 0.2
        assert view.success_message is None

    async def test_second_action_is_refused_while_busy(self, view, gateway):
        gateway.gate = asyncio.Event()

        first = asyncio.create_task(view.book("2"))
        await asyncio.sleep(0)
        assert view.is_busy is True

        assert await view.book("1") is None
        assert await view.reset() is False
        assert await view.load() is False
        assert gateway.book_calls == [[1, 2]]
        assert gateway.reset_calls == 0

        gateway.gate.set()
        assert await first == [1, 2]
        assert view.is_busy is False


class TestReset:

    async def test_reset_clears_bookings(self, view, gateway, notifier):
        await view.book("3")

        assert await view.reset() is True

        assert view.booked_count == 0
        assert view.success_message is None
        assert notifier.last == ("info", RESET_DONE)

    async def test_reset_failure(self, view, gateway, notifier):
        await view.book("3")
        gateway.fail_reset = True

        assert await view.reset() is False

        assert view.booked_count == 3
        assert notifier.last == ("error", RESET_FAILED)

    async def test_refresh_failure_after_reset_keeps_reset_store(self, view, gateway, notifier):
        await view.book("3")
        gateway.fail_fetch = True

        assert await view.reset() is True

        assert view.booked_count == 0
        assert notifier.last == ("info", RESET_DONE)


class TestRender:

    async def test_render_marks_booked_seats(self, view):
        await view.book("2")

        text = view.render()
        lines = text.splitlines()

        assert lines[0].split() == ["[1]", "[2]", "3", "4", "5", "6", "7"]
        assert lines[10].split() == [str(n) for n in range(71, 78)]
        assert "Booked Seats = 2    Available Seats = 75" in text
        assert "Seat Booking Successful! Seats: 1, 2" in text


class TestNotifier:

    def test_notifier_is_abstract(self):
        with pytest.raises(TypeError):
            Notifier()

    def test_console_notifier_prefixes_each_kind(self):
        stream = io.StringIO()
        notifier = ConsoleNotifier(stream)

        notifier.error("Failed to reset bookings.")
        notifier.success("Seat Booking Successful! Seats: 1")
        notifier.info("All bookings have been reset.")

        assert stream.getvalue().splitlines() == [
            "[!] Failed to reset bookings.",
            "[ok] Seat Booking Successful! Seats: 1",
            "[i] All bookings have been reset.",
        ]
