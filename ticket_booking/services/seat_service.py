"""
Seat service for persisting seat statuses and booking operations.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Seat, SeatStatus
from ..schemas.seat import SeatSummaryResponse
from ..seating import SeatLayout, SeatStore, allocate, to_seat_number
from ..utils.exceptions import (
    AllocationError, SeatAlreadyBookedError, SeatNotFoundError, ValidationError
)
from ..utils.logging_config import log_business_event

logger = logging.getLogger(__name__)


class SeatService:
    """Service class for seat management operations."""

    def __init__(self, db: AsyncSession, layout: Optional[SeatLayout] = None):
        """Initialize the seat service with database session and seat grid."""
        self.db = db
        self.layout = layout or SeatLayout.from_settings()

    async def ensure_seats(self) -> int:
        """
        Create any seat of the grid that is missing from the database.

        Returns:
            Number of seats created
        """
        result = await self.db.execute(select(Seat.number))
        existing = set(result.scalars().all())

        missing = [
            number for number in range(1, self.layout.total_seats + 1)
            if number not in existing
        ]
        for number in missing:
            self.db.add(Seat(number=number, status=SeatStatus.AVAILABLE))

        extra = [number for number in existing if number > self.layout.total_seats]
        if extra:
            logger.warning(
                f"{len(extra)} seat(s) beyond the {self.layout.total_seats}-seat grid "
                f"are present and will be ignored"
            )

        if missing:
            await self.db.commit()
            logger.info(f"Created {len(missing)} seat(s)")

        return len(missing)

    async def list_seats(self) -> List[Seat]:
        """
        Get every seat of the grid ordered by seat number.

        Returns:
            List of seat instances
        """
        result = await self.db.execute(
            select(Seat)
            .where(Seat.number <= self.layout.total_seats)
            .order_by(Seat.number)
        )
        return list(result.scalars().all())

    async def get_summary(self) -> SeatSummaryResponse:
        """Get booked and available seat counts."""
        seats = await self.list_seats()
        booked = sum(1 for seat in seats if seat.status == SeatStatus.BOOKED)

        return SeatSummaryResponse(
            total_seats=len(seats),
            booked_seats=booked,
            available_seats=len(seats) - booked,
            rows=self.layout.rows,
            seats_per_row=self.layout.seats_per_row
        )

    async def book_seats(self, seat_numbers: Sequence[int]) -> List[int]:
        """
        Mark specific seats booked in a single transaction.

        Args:
            seat_numbers: 1-based seat numbers

        Returns:
            The booked seat numbers, in request order

        Raises:
            ValidationError: If no seats or duplicate seats are given
            SeatNotFoundError: If any seat number is outside the grid
            SeatAlreadyBookedError: If any seat is already booked
        """
        if not seat_numbers:
            raise ValidationError("At least one seat number is required")
        if len(set(seat_numbers)) != len(seat_numbers):
            raise ValidationError(
                "Seat numbers must be unique",
                details={"seat_numbers": list(seat_numbers)}
            )

        outside = [
            number for number in seat_numbers
            if not 1 <= number <= self.layout.total_seats
        ]
        if outside:
            raise SeatNotFoundError(outside)

        result = await self.db.execute(
            select(Seat)
            .where(Seat.number.in_(seat_numbers))
            .with_for_update()
        )
        seats = {seat.number: seat for seat in result.scalars().all()}

        missing = [number for number in seat_numbers if number not in seats]
        if missing:
            await self.db.rollback()
            raise SeatNotFoundError(missing)

        taken = [number for number in seat_numbers if not seats[number].is_available]
        if taken:
            await self.db.rollback()
            raise SeatAlreadyBookedError(taken)

        for number in seat_numbers:
            seats[number].status = SeatStatus.BOOKED

        await self.db.commit()

        booked = list(seat_numbers)
        log_business_event("seats_booked", {"seat_numbers": booked, "count": len(booked)})
        return booked

    async def auto_book(self, count: int) -> List[int]:
        """
        Allocate ``count`` seats from the persisted statuses and book them.

        Args:
            count: Number of seats requested

        Returns:
            The booked seat numbers, row-ascending then column-ascending

        Raises:
            AllocationError: If the request cannot be satisfied
        """
        result = await self.db.execute(
            select(Seat)
            .where(Seat.number <= self.layout.total_seats)
            .order_by(Seat.number)
            .with_for_update()
        )
        seats = list(result.scalars().all())
        store = SeatStore.from_statuses([seat.status for seat in seats], self.layout)

        try:
            indices = allocate(store, count)
        except AllocationError:
            await self.db.rollback()
            raise

        for index in indices:
            seats[index].status = SeatStatus.BOOKED

        await self.db.commit()

        booked = [to_seat_number(index) for index in indices]
        log_business_event(
            "seats_booked",
            {"seat_numbers": booked, "count": len(booked), "mode": "auto"}
        )
        return booked

    async def reset_seats(self) -> int:
        """
        Mark every seat available.

        Returns:
            Number of seats in the grid
        """
        await self.db.execute(
            update(Seat)
            .where(Seat.status != SeatStatus.AVAILABLE)
            .values(status=SeatStatus.AVAILABLE)
        )
        await self.db.commit()

        log_business_event("seats_reset", {"total_seats": self.layout.total_seats})
        return self.layout.total_seats
