"""FastAPI application setup and configuration."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ticket_booking import __version__
from ticket_booking.config import settings
from ticket_booking.api import api_router
from ticket_booking.database import init_database, close_database, get_db_session
from ticket_booking.middleware import (
    ErrorHandlerMiddleware, LoggingMiddleware, register_exception_handlers
)
from ticket_booking.seating import SeatLayout
from ticket_booking.services.seat_service import SeatService
from ticket_booking.utils.logging_config import setup_logging

# Set up logging
setup_logging(
    log_level="DEBUG" if settings.debug else settings.log_level,
    log_file=settings.log_file,
    enable_json_logging=settings.enable_json_logging or settings.environment == "production",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting Ticket Booking service")
    await init_database()
    async with get_db_session() as session:
        created = await SeatService(session, SeatLayout.from_settings()).ensure_seats()
    logger.info(f"Seat grid ready ({created} seat(s) created)")
    yield
    # Shutdown
    logger.info("Shutting down Ticket Booking service")
    await close_database()


app = FastAPI(
    title="Ticket Booking API",
    description="""
    ## Ticket Booking

    Books seats on a fixed grid of rows. A request for N seats (at most one
    row's worth) is seated together in a single row when any row has room,
    otherwise seats are filled row by row from the front.

    Seat numbers are 1-based and run row by row.

    ### Error Handling

    ```json
    {
      "error": {
        "error_code": "SEAT_ALREADY_BOOKED",
        "message": "Seat(s) 3 already booked",
        "details": {"seat_numbers": [3]},
        "suggestions": ["Choose different seats"]
      },
      "error_id": "...",
      "timestamp": "..."
    }
    ```
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "seats",
            "description": "Seat listing, booking and reset operations"
        },
        {
            "name": "health",
            "description": "System health and monitoring endpoints"
        }
    ],
    lifespan=lifespan,
)

# Middleware order matters: the last added runs first.

app.add_middleware(ErrorHandlerMiddleware, debug=settings.debug)

if settings.enable_request_logging:
    app.add_middleware(LoggingMiddleware)

if settings.debug:
    # Cannot use credentials with wildcard origins
    cors_origins = ["*"]
    cors_allow_credentials = False
else:
    cors_origins = settings.cors_origins
    cors_allow_credentials = settings.cors_allow_credentials

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=settings.cors_expose_headers
)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for API information.
    """
    return {
        "message": "Ticket Booking API",
        "version": __version__,
        "docs_url": "/docs",
        "status": "operational"
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Basic health check endpoint for uptime monitoring.
    """
    return {"status": "healthy", "service": "ticket-booking"}
