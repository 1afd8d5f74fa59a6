"""Shared test configuration and fixtures.

Each test runs against a fresh database (in-memory SQLite by default, or
``TEST_DATABASE_URL`` for PostgreSQL) inside a transaction that rolls back
after the test.
"""

import asyncio
import os
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import date
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from hotel_desk.api.deps import get_calendar_store
from hotel_desk.calendar.store import SqlCalendarStore
from hotel_desk.database import Base, get_db
from hotel_desk.main import app
from hotel_desk.models.booking import Booking
from hotel_desk.models.guest import Guest
from hotel_desk.models.room import Room

_test_db_url = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def _make_engine():
    if _test_db_url.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory DB.
        return create_async_engine(
            _test_db_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(_test_db_url, pool_pre_ping=True)


# ---------------------------------------------------------------------------
# Engine and schema
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine():
    """Create an engine with all tables, dropped again after the test."""
    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


# ---------------------------------------------------------------------------
# Per-test: transactional rollback for isolation
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


class _SharedSessionContext:
    """Async context manager that lends out the shared test session."""

    def __init__(self, session: AsyncSession, lock: asyncio.Lock):
        self._session = session
        self._lock = lock

    async def __aenter__(self) -> AsyncSession:
        await self._lock.acquire()
        return self._session

    async def __aexit__(self, *args):
        # Left open; the db_session fixture closes it
        self._lock.release()


class SharedSessionFactory:
    """Session factory stand-in returning the test session, one user at a time."""

    def __init__(self, session: AsyncSession, lock: asyncio.Lock):
        self._session = session
        self._lock = lock

    def __call__(self) -> _SharedSessionContext:
        return _SharedSessionContext(self._session, self._lock)


@pytest_asyncio.fixture
async def session_lock() -> asyncio.Lock:
    """Serialises use of the single test session.

    The calendar fetches rooms and bookings concurrently; an AsyncSession
    must not run two statements at once.
    """
    return asyncio.Lock()


@pytest_asyncio.fixture
async def session_factory(db_session: AsyncSession, session_lock: asyncio.Lock) -> SharedSessionFactory:
    return SharedSessionFactory(db_session, session_lock)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    session_lock: asyncio.Lock,
    session_factory: SharedSessionFactory,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_lock:
            yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_calendar_store] = lambda: SqlCalendarStore(session_factory)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: rooms, guests, bookings
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_room(client: AsyncClient) -> dict:
    """Create and return an available room via the API."""
    response = await client.post(
        "/api/v1/rooms",
        json={
            "room_number": "101",
            "room_type": "Deluxe Suite",
            "floor": 1,
            "price_per_night": 150.00,
            "max_occupancy": 2,
            "amenities": ["WiFi", "TV", "AC"],
            "description": "Corner room with a garden view.",
        },
    )
    assert response.status_code == 201, f"Failed to create test room: {response.text}"
    return response.json()


@pytest_asyncio.fixture
async def test_guest(client: AsyncClient) -> dict:
    """Create and return a test guest via the API."""
    unique = uuid.uuid4().hex[:8]
    response = await client.post(
        "/api/v1/guests",
        json={
            "first_name": "Test",
            "last_name": "Guest",
            "email": f"guest-{unique}@test.com",
            "phone": "+15550000000",
        },
    )
    assert response.status_code == 201, f"Failed to create test guest: {response.text}"
    return response.json()


@pytest_asyncio.fixture
async def make_room(db_session: AsyncSession) -> Callable[..., Awaitable[Room]]:
    """Factory inserting rooms directly via the ORM."""

    async def _make(room_number: str, room_type: str = "Standard Room", **fields) -> Room:
        room = Room(room_number=room_number, room_type=room_type, price_per_night=Decimal("100.00"), **fields)
        db_session.add(room)
        await db_session.flush()
        return room

    return _make


@pytest_asyncio.fixture
async def make_guest(db_session: AsyncSession) -> Callable[..., Awaitable[Guest]]:
    """Factory inserting guests directly via the ORM."""

    async def _make(first_name: str, last_name: str) -> Guest:
        guest = Guest(
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name.lower()}-{uuid.uuid4().hex[:8]}@test.com",
        )
        db_session.add(guest)
        await db_session.flush()
        return guest

    return _make


@pytest_asyncio.fixture
async def make_booking(db_session: AsyncSession) -> Callable[..., Awaitable[Booking]]:
    """Factory inserting bookings directly via the ORM, bypassing intake rules."""

    async def _make(
        room: Room,
        check_in: date,
        check_out: date,
        status: str = "confirmed",
        guest: Guest | None = None,
    ) -> Booking:
        booking = Booking(
            room_id=room.id,
            guest_id=guest.id if guest else None,
            check_in=check_in,
            check_out=check_out,
            status=status,
        )
        db_session.add(booking)
        await db_session.flush()
        return booking

    return _make
