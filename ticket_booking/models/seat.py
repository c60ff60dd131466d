"""
Seat model persisting the booking status of every seat in the grid.
"""

from sqlalchemy import CheckConstraint, Enum, Integer
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from ..seating.store import SeatStatus


class Seat(Base):
    """One seat, keyed by its 1-based seat number."""

    __tablename__ = "seats"

    number: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False
    )

    status: Mapped[SeatStatus] = mapped_column(
        Enum(SeatStatus, name="seat_status"),
        default=SeatStatus.AVAILABLE,
        nullable=False,
        index=True
    )

    __table_args__ = (
        CheckConstraint("number >= 1", name="ck_seats_number_positive"),
    )

    @property
    def is_available(self) -> bool:
        """Check if the seat is available for booking."""
        return self.status == SeatStatus.AVAILABLE

    def __repr__(self) -> str:
        """String representation of the seat."""
        return f"<Seat(number={self.number}, status={self.status.value})>"
