"""API tests for the seat endpoints."""

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import OperationalError

from ticket_booking.models import Seat
from ticket_booking.services.seat_service import SeatService
from ticket_booking.utils.exceptions import ErrorCode, ExternalServiceError


class TestListSeats:

    async def test_lists_every_seat_in_order(self, async_client):
        response = await async_client.get("/api/v1/seats")

        assert response.status_code == 200
        seats = response.json()
        assert [seat["seat_number"] for seat in seats] == list(range(1, 78))
        assert {seat["status"] for seat in seats} == {"available"}

    async def test_summary_counts(self, async_client, book_in_db):
        await book_in_db([1, 2, 30])

        response = await async_client.get("/api/v1/seats/summary")

        assert response.status_code == 200
        assert response.json() == {
            "total_seats": 77,
            "booked_seats": 3,
            "available_seats": 74,
            "rows": 11,
            "seats_per_row": 7,
        }

    async def test_responses_carry_request_id(self, async_client):
        response = await async_client.get("/api/v1/seats", headers={"X-Request-ID": "abc-123"})

        assert response.headers["X-Request-ID"] == "abc-123"
        assert "X-Process-Time" in response.headers


class TestBookSeats:

    async def test_books_requested_seats(self, async_client):
        response = await async_client.post("/api/v1/seats/book", json={"seat_numbers": [1, 2, 3]})

        assert response.status_code == 200
        assert response.json() == {
            "booked_seats": [1, 2, 3],
            "message": "Seat Booking Successful! Seats: 1, 2, 3",
        }

        seats = (await async_client.get("/api/v1/seats")).json()
        booked = [seat["seat_number"] for seat in seats if seat["status"] == "booked"]
        assert booked == [1, 2, 3]

    async def test_already_booked_seat_rejects_whole_booking(self, async_client, book_in_db):
        await book_in_db([2])

        response = await async_client.post("/api/v1/seats/book", json={"seat_numbers": [1, 2]})

        assert response.status_code == 409
        body = response.json()
        assert body["error"]["error_code"] == "SEAT_ALREADY_BOOKED"
        assert body["error"]["details"] == {"seat_numbers": [2]}
        assert "error_id" in body

        seats = (await async_client.get("/api/v1/seats")).json()
        assert seats[0]["status"] == "available"

    @pytest.mark.parametrize("seat_number", [0, 78])
    async def test_unknown_seat(self, async_client, seat_number):
        response = await async_client.post(
            "/api/v1/seats/book", json={"seat_numbers": [5, seat_number]}
        )

        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "NOT_FOUND"

        seats = (await async_client.get("/api/v1/seats")).json()
        assert seats[4]["status"] == "available"

    @pytest.mark.parametrize("payload", [{"seat_numbers": []}, {"seat_numbers": [4, 4]}, {}])
    async def test_invalid_payload(self, async_client, payload):
        response = await async_client.post("/api/v1/seats/book", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error"]["error_code"] == "VALIDATION_ERROR"
        assert "seat_numbers" in body["error"]["details"]["field_errors"]
        assert "error_id" in body
        assert "X-Request-ID" in response.headers


class TestAutoBook:

    async def test_keeps_party_in_one_row(self, async_client, book_in_db):
        await book_in_db([1, 2, 3, 4, 5])

        response = await async_client.post("/api/v1/seats/auto-book", json={"count": 3})

        assert response.status_code == 200
        assert response.json()["booked_seats"] == [8, 9, 10]

    async def test_fills_across_rows_when_no_row_fits(self, async_client, book_in_db):
        free = {1, 2, 8, 9, 10}
        await book_in_db([n for n in range(1, 78) if n not in free])

        response = await async_client.post("/api/v1/seats/auto-book", json={"count": 4})

        assert response.status_code == 200
        assert response.json()["booked_seats"] == [1, 2, 8, 9]

    async def test_too_many(self, async_client):
        response = await async_client.post("/api/v1/seats/auto-book", json={"count": 8})

        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "TOO_MANY_REQUESTED"

    async def test_invalid_count(self, async_client):
        response = await async_client.post("/api/v1/seats/auto-book", json={"count": 0})

        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "INVALID_REQUEST_COUNT"

    async def test_sold_out(self, async_client, book_in_db):
        await book_in_db()

        response = await async_client.post("/api/v1/seats/auto-book", json={"count": 1})

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["error_code"] == "INSUFFICIENT_SEATS"
        assert error["message"] == "Not enough seats available to fulfill your booking."


class TestResetSeats:

    async def test_reset_frees_every_seat(self, async_client, book_in_db):
        await book_in_db([3, 4, 50])

        response = await async_client.post("/api/v1/seats/reset")

        assert response.status_code == 200
        assert response.json() == {"message": "All bookings have been reset.", "total_seats": 77}
        summary = (await async_client.get("/api/v1/seats/summary")).json()
        assert summary["booked_seats"] == 0

    async def test_reset_twice(self, async_client, book_in_db):
        await book_in_db()

        await async_client.post("/api/v1/seats/reset")
        response = await async_client.post("/api/v1/seats/reset")

        assert response.status_code == 200
        seats = (await async_client.get("/api/v1/seats")).json()
        assert {seat["status"] for seat in seats} == {"available"}


class TestHealth:

    async def test_health(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_root(self, async_client):
        response = await async_client.get("/")

        assert response.json()["message"] == "Ticket Booking API"


class TestErrorResponses:

    async def test_database_outage_returns_503(self, async_client, monkeypatch):
        async def unavailable(self):
            raise OperationalError("SELECT seats", {}, ConnectionError("connection refused"))

        monkeypatch.setattr(SeatService, "list_seats", unavailable)

        response = await async_client.get("/api/v1/seats")

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "30"
        body = response.json()
        assert body["error"]["error_code"] == "INTERNAL_ERROR"
        assert body["error"]["details"] == {
            "service_name": "database",
            "status_code": None,
            "error_type": "OperationalError",
        }
        assert "error_id" in body
        assert "timestamp" in body

    async def test_missing_seat_row_is_an_invalid_store(self, async_client, session_factory):
        async with session_factory() as session:
            await session.execute(delete(Seat).where(Seat.number == 40))
            await session.commit()

        response = await async_client.post("/api/v1/seats/auto-book", json={"count": 2})

        assert response.status_code == 500
        assert response.json()["error"]["error_code"] == "INVALID_SEAT_STORE"

    async def test_non_integer_count_is_a_validation_error(self, async_client):
        response = await async_client.post("/api/v1/seats/auto-book", json={"count": "two"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["error_code"] == "VALIDATION_ERROR"
        assert list(error["details"]["field_errors"]) == ["count"]

    def test_external_service_error_keeps_extra_details(self):
        error = ExternalServiceError(
            "database", "down", status_code=503, details={"error_type": "TimeoutError"}
        )

        assert error.error_code == ErrorCode.INTERNAL_ERROR
        assert error.details == {
            "service_name": "database",
            "status_code": 503,
            "error_type": "TimeoutError",
        }
