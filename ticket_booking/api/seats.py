"""
Seat booking API endpoints.

Errors raised by the seat service propagate to ``ErrorHandlerMiddleware``,
which renders them as structured JSON error responses.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from ..services.seat_service import SeatService
from ..schemas.seat import (
    SeatResponse, SeatSummaryResponse, SeatBookingRequest, AutoBookingRequest,
    SeatBookingResponse, SeatResetResponse
)
from ..utils.dependencies import get_seat_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/seats", tags=["seats"])


def _booking_response(seat_numbers: List[int]) -> SeatBookingResponse:
    return SeatBookingResponse(
        booked_seats=seat_numbers,
        message=f"Seat Booking Successful! Seats: {', '.join(str(n) for n in seat_numbers)}"
    )


@router.get("", response_model=List[SeatResponse])
async def list_seats(seat_service: SeatService = Depends(get_seat_service)):
    """
    Get every seat with its status, ordered by seat number.

    Returns:
        List of seats with 1-based seat numbers
    """
    seats = await seat_service.list_seats()
    return [SeatResponse(seat_number=seat.number, status=seat.status) for seat in seats]


@router.get("/summary", response_model=SeatSummaryResponse)
async def get_seat_summary(seat_service: SeatService = Depends(get_seat_service)):
    """Get booked and available seat counts."""
    return await seat_service.get_summary()


@router.post("/book", response_model=SeatBookingResponse)
async def book_seats(
    booking_request: SeatBookingRequest,
    seat_service: SeatService = Depends(get_seat_service)
):
    """
    Book specific seats.

    Either every requested seat is booked or none is.

    Args:
        booking_request: 1-based seat numbers to book
        seat_service: Seat service

    Returns:
        Booking confirmation
    """
    booked = await seat_service.book_seats(booking_request.seat_numbers)
    return _booking_response(booked)


@router.post("/auto-book", response_model=SeatBookingResponse)
async def auto_book_seats(
    booking_request: AutoBookingRequest,
    seat_service: SeatService = Depends(get_seat_service)
):
    """
    Let the service choose and book seats.

    Seats are kept together in one row when any row has room, otherwise
    they are filled row by row from the front.
    """
    booked = await seat_service.auto_book(booking_request.count)
    return _booking_response(booked)


@router.post("/reset", response_model=SeatResetResponse)
async def reset_seats(seat_service: SeatService = Depends(get_seat_service)):
    """Mark every seat available."""
    total = await seat_service.reset_seats()
    return SeatResetResponse(message="All bookings have been reset.", total_seats=total)
