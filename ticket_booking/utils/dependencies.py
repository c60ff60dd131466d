"""
FastAPI dependencies for the seat endpoints.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..seating import SeatLayout
from ..services.seat_service import SeatService


def get_seat_layout() -> SeatLayout:
    """Get the configured seat grid."""
    return SeatLayout.from_settings()


async def get_seat_service(
    db: AsyncSession = Depends(get_db),
    layout: SeatLayout = Depends(get_seat_layout)
) -> SeatService:
    """
    Get a seat service bound to the request's database session.

    Args:
        db: Database session
        layout: Configured seat grid

    Returns:
        Seat service instance
    """
    return SeatService(db, layout)
