"""Record stores the calendar reads from and writes to.

The calendar never touches a database session or HTTP client directly; it
is handed a ``CalendarStore``. ``HttpCalendarStore`` talks to the REST API
(the remote record store); ``SqlCalendarStore`` runs the same queries
in-process against an ``async_sessionmaker``.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import date
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel
from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_desk.config import settings
from hotel_desk.models.booking import Booking
from hotel_desk.models.room import Room
from hotel_desk.schemas.calendar import CalendarBooking, CalendarRoom

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class StoreError(Exception):
    """A read or write against the record store failed."""


class RecordNotFound(StoreError):
    """The requested record does not exist."""


class CalendarStore(Protocol):
    """Operations the calendar needs from the record store."""

    async def list_rooms(self) -> list[CalendarRoom]: ...

    async def list_bookings(self, window_start: date, window_end: date) -> list[CalendarBooking]: ...

    async def get_booking(self, booking_id: uuid.UUID) -> CalendarBooking: ...

    async def update_booking(
        self,
        booking_id: uuid.UUID,
        room_id: uuid.UUID,
        check_in: date,
        check_out: date,
    ) -> CalendarBooking: ...


# ---------------------------------------------------------------------------
# Shared queries
# ---------------------------------------------------------------------------


def rooms_query() -> Select:
    """All rooms ordered by room number."""
    return select(Room).order_by(Room.room_number)


def bookings_window_query(window_start: date, window_end: date) -> Select:
    """Bookings whose stay touches [window_start, window_end], with guest names loaded."""
    return (
        select(Booking)
        .options(selectinload(Booking.guest))
        .where(Booking.check_out >= window_start, Booking.check_in <= window_end)
        .order_by(Booking.check_in, Booking.created_at)
    )


# ---------------------------------------------------------------------------
# REST-backed store
# ---------------------------------------------------------------------------


class HttpCalendarStore:
    """Calendar store backed by the Hotel Desk REST API."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @classmethod
    def from_settings(cls) -> "HttpCalendarStore":
        """Build a store with its own client pointed at ``settings.api_base_url``."""
        client = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
        )
        return cls(client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpCalendarStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise StoreError(f"{method} {url} failed: {exc}") from exc

        if response.status_code == 404:
            raise RecordNotFound(f"{method} {url}: not found")
        if response.is_error:
            raise StoreError(f"{method} {url} returned {response.status_code}: {response.text}")
        try:
            return response.json()
        except ValueError as exc:
            raise StoreError(f"{method} {url} returned a body that is not JSON") from exc

    @staticmethod
    def _parse(model: type[T], data: Any, what: str) -> T:
        try:
            return model.model_validate(data)
        except ValueError as exc:
            raise StoreError(f"Malformed {what} in store response: {exc}") from exc

    @classmethod
    def _parse_items(cls, model: type[T], data: Any, what: str) -> list[T]:
        try:
            items = data["items"]
        except (KeyError, TypeError) as exc:
            raise StoreError(f"Store response for {what} has no item list") from exc
        if not isinstance(items, list):
            raise StoreError(f"Store response for {what} has no item list")
        return [cls._parse(model, item, what) for item in items]

    async def list_rooms(self) -> list[CalendarRoom]:
        data = await self._request("GET", "/api/v1/rooms")
        return self._parse_items(CalendarRoom, data, "rooms")

    async def list_bookings(self, window_start: date, window_end: date) -> list[CalendarBooking]:
        data = await self._request(
            "GET",
            "/api/v1/bookings",
            params={"stay_from": window_start.isoformat(), "stay_to": window_end.isoformat()},
        )
        return self._parse_items(CalendarBooking, data, "bookings")

    async def get_booking(self, booking_id: uuid.UUID) -> CalendarBooking:
        data = await self._request("GET", f"/api/v1/bookings/{booking_id}")
        return self._parse(CalendarBooking, data, "booking")

    async def update_booking(
        self,
        booking_id: uuid.UUID,
        room_id: uuid.UUID,
        check_in: date,
        check_out: date,
    ) -> CalendarBooking:
        data = await self._request(
            "PATCH",
            f"/api/v1/bookings/{booking_id}",
            json={
                "room_id": str(room_id),
                "check_in": check_in.isoformat(),
                "check_out": check_out.isoformat(),
            },
        )
        return self._parse(CalendarBooking, data, "booking")


# ---------------------------------------------------------------------------
# In-process store
# ---------------------------------------------------------------------------


class SqlCalendarStore:
    """Calendar store that queries the database directly, one session per call."""

    def __init__(self, session_factory: Callable[[], Any]):
        self._session_factory = session_factory

    async def list_rooms(self) -> list[CalendarRoom]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(rooms_query())
                return [CalendarRoom.model_validate(room) for room in result.scalars().all()]
        except SQLAlchemyError as exc:
            raise StoreError("Failed to load rooms") from exc

    async def list_bookings(self, window_start: date, window_end: date) -> list[CalendarBooking]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(bookings_window_query(window_start, window_end))
                return [CalendarBooking.model_validate(b) for b in result.scalars().all()]
        except SQLAlchemyError as exc:
            raise StoreError("Failed to load bookings") from exc

    async def get_booking(self, booking_id: uuid.UUID) -> CalendarBooking:
        try:
            async with self._session_factory() as session:
                booking = await self._get(session, booking_id)
                return CalendarBooking.model_validate(booking)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to load booking {booking_id}") from exc

    async def update_booking(
        self,
        booking_id: uuid.UUID,
        room_id: uuid.UUID,
        check_in: date,
        check_out: date,
    ) -> CalendarBooking:
        try:
            async with self._session_factory() as session:
                booking = await self._get(session, booking_id)
                if await session.get(Room, room_id) is None:
                    raise RecordNotFound(f"Room {room_id} not found")

                booking.room_id = room_id
                booking.check_in = check_in
                booking.check_out = check_out
                await session.commit()
                await session.refresh(booking)
                return CalendarBooking.model_validate(booking)
        except SQLAlchemyError as exc:
            logger.exception("Updating booking %s failed", booking_id)
            raise StoreError(f"Failed to update booking {booking_id}") from exc

    @staticmethod
    async def _get(session: AsyncSession, booking_id: uuid.UUID) -> Booking:
        result = await session.execute(
            select(Booking).options(selectinload(Booking.guest)).where(Booking.id == booking_id)
        )
        booking = result.scalar_one_or_none()
        if booking is None:
            raise RecordNotFound(f"Booking {booking_id} not found")
        return booking
