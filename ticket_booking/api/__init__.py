"""API endpoints for the Ticket Booking service."""

from fastapi import APIRouter
from .seats import router as seats_router

# Create main API router
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(seats_router)

__all__ = ["api_router"]
