"""
Pydantic schemas for seat listing, booking and reset.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

from ..seating.store import SeatStatus


class SeatResponse(BaseModel):
    """Schema for one seat in the seat listing."""
    seat_number: int = Field(..., ge=1, description="1-based seat number")
    status: SeatStatus = Field(..., description="Seat status")


class SeatSummaryResponse(BaseModel):
    """Schema for seat counts."""
    total_seats: int
    booked_seats: int
    available_seats: int
    rows: int
    seats_per_row: int


class SeatBookingRequest(BaseModel):
    """Schema for booking specific seats."""
    seat_numbers: List[int] = Field(
        ...,
        min_length=1,
        description="1-based seat numbers to book"
    )

    @field_validator("seat_numbers")
    @classmethod
    def validate_unique(cls, value: List[int]) -> List[int]:
        if len(set(value)) != len(value):
            raise ValueError("Seat numbers must be unique")
        return value


class AutoBookingRequest(BaseModel):
    """Schema for letting the service pick the seats."""
    count: int = Field(..., description="Number of seats to book")


class SeatBookingResponse(BaseModel):
    """Schema for a confirmed booking."""
    booked_seats: List[int] = Field(..., description="1-based seat numbers now booked")
    message: str


class SeatResetResponse(BaseModel):
    """Schema for a completed reset."""
    message: str
    total_seats: int
