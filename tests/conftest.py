"""Shared fixtures: in-memory database, API client and seat helpers."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ticket_booking.database import create_tables, get_db
from ticket_booking.main import app
from ticket_booking.models import Seat
from ticket_booking.seating import SeatLayout, SeatStatus
from ticket_booking.services.seat_service import SeatService


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def layout() -> SeatLayout:
    return SeatLayout(rows=11, seats_per_row=7)


@pytest_asyncio.fixture
async def async_engine():
    """Create an in-memory database shared by every session of one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine, layout):
    factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await SeatService(session, layout).ensure_seats()
    return factory


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(session_factory):
    """API client talking to the app in-process."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def book_in_db(session_factory):
    """Mark seats booked directly in the database, by 1-based number."""
    async def _book(seat_numbers=None):
        async with session_factory() as session:
            statement = update(Seat).values(status=SeatStatus.BOOKED)
            if seat_numbers is not None:
                statement = statement.where(Seat.number.in_(list(seat_numbers)))
            await session.execute(statement)
            await session.commit()

    return _book
