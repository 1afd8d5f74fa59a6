"""Tests for the calendar's record stores and the view-model wired to them.

``HttpCalendarStore`` runs against the app through the test client, so the
calendar exercises the real rooms/bookings endpoints. ``SqlCalendarStore``
shares the test session via the ``session_factory`` fixture.
"""

import uuid
from datetime import date

import httpx
import pytest
from httpx import AsyncClient

from hotel_desk.calendar import (
    CalendarView,
    DragPhase,
    DropTarget,
    HttpCalendarStore,
    RecordNotFound,
    SqlCalendarStore,
    StoreError,
)

pytestmark = pytest.mark.asyncio


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://store")


def _booking_json(booking_id: uuid.UUID, room_id: uuid.UUID) -> dict:
    return {
        "id": str(booking_id),
        "room_id": str(room_id),
        "check_in": "2024-01-10",
        "check_out": "2024-01-12",
        "status": "confirmed",
        "guest": None,
    }


# ---------------------------------------------------------------------------
# HttpCalendarStore
# ---------------------------------------------------------------------------


class TestHttpCalendarStore:
    async def test_list_rooms_ordered(self, client: AsyncClient, make_room) -> None:
        await make_room("305")
        await make_room("101")
        await make_room("204")

        rooms = await HttpCalendarStore(client).list_rooms()

        assert [r.room_number for r in rooms] == ["101", "204", "305"]

    async def test_list_bookings_window_with_guest_names(
        self, client: AsyncClient, make_room, make_guest, make_booking
    ) -> None:
        room = await make_room("101")
        guest = await make_guest("Emily", "Watson")
        inside = await make_booking(room, date(2024, 1, 10), date(2024, 1, 12), guest=guest)
        spans_start = await make_booking(room, date(2023, 12, 28), date(2024, 1, 1))
        spans_end = await make_booking(room, date(2024, 1, 31), date(2024, 2, 3))
        await make_booking(room, date(2023, 12, 20), date(2023, 12, 31))  # ends before the month
        await make_booking(room, date(2024, 2, 1), date(2024, 2, 4))  # starts after the month

        bookings = await HttpCalendarStore(client).list_bookings(date(2024, 1, 1), date(2024, 1, 31))

        assert {b.id for b in bookings} == {inside.id, spans_start.id, spans_end.id}
        by_id = {b.id: b for b in bookings}
        assert by_id[inside.id].guest_label == "Emily Watson"
        assert by_id[spans_start.id].guest is None

    async def test_update_booking(self, client: AsyncClient, make_room, make_booking) -> None:
        room_a = await make_room("101")
        room_b = await make_room("102")
        booking = await make_booking(room_a, date(2024, 1, 10), date(2024, 1, 12))

        updated = await HttpCalendarStore(client).update_booking(
            booking.id, room_b.id, date(2024, 1, 15), date(2024, 1, 17)
        )

        assert updated.room_id == room_b.id
        assert (updated.check_in, updated.check_out) == (date(2024, 1, 15), date(2024, 1, 17))

    async def test_missing_booking(self, client: AsyncClient) -> None:
        with pytest.raises(RecordNotFound):
            await HttpCalendarStore(client).get_booking(uuid.uuid4())

    async def test_server_error_raises_store_error(self) -> None:
        async with _mock_client(lambda request: httpx.Response(500, text="boom")) as http:
            with pytest.raises(StoreError):
                await HttpCalendarStore(http).list_rooms()

    async def test_transport_error_raises_store_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _mock_client(refuse) as http:
            with pytest.raises(StoreError):
                await HttpCalendarStore(http).list_bookings(date(2024, 1, 1), date(2024, 1, 31))

    async def test_non_json_body_raises_store_error(self) -> None:
        async with _mock_client(lambda request: httpx.Response(200, text="<html>proxy error</html>")) as http:
            with pytest.raises(StoreError):
                await HttpCalendarStore(http).list_rooms()

    async def test_missing_item_list_raises_store_error(self) -> None:
        async with _mock_client(lambda request: httpx.Response(200, json={"rooms": []})) as http:
            with pytest.raises(StoreError):
                await HttpCalendarStore(http).list_rooms()

    async def test_malformed_booking_raises_store_error(self) -> None:
        body = {"items": [{"id": str(uuid.uuid4()), "check_in": "not a date"}], "total": 1}
        async with _mock_client(lambda request: httpx.Response(200, json=body)) as http:
            with pytest.raises(StoreError):
                await HttpCalendarStore(http).list_bookings(date(2024, 1, 1), date(2024, 1, 31))

    async def test_context_manager_closes_client(self) -> None:
        http = _mock_client(lambda request: httpx.Response(200, json={"items": [], "total": 0}))
        async with HttpCalendarStore(http) as store:
            assert await store.list_rooms() == []
        assert http.is_closed


class TestCalendarOverHttp:
    async def test_drag_scenario_end_to_end(self, client: AsyncClient, make_room, make_guest, make_booking) -> None:
        """Room A 2024-01-10..12 dragged to room B on 2024-01-15 lands on 2024-01-15..17."""
        room_a = await make_room("A")
        room_b = await make_room("B")
        guest = await make_guest("Michael", "Chen")
        booking = await make_booking(room_a, date(2024, 1, 10), date(2024, 1, 12), guest=guest)

        view = CalendarView(HttpCalendarStore(client), month=date(2024, 1, 1))
        await view.load()
        assert [r.room_number for r in view.rooms] == ["A", "B"]
        assert view.booking_at(room_a.id, date(2024, 1, 10)).id == booking.id

        view.drag_start(booking.id)
        plan = await view.drop(DropTarget(room_id=room_b.id, day=date(2024, 1, 15)))

        assert plan is not None and plan.delta_days == 5
        assert view.booking_at(room_a.id, date(2024, 1, 10)) is None
        moved = view.booking_at(room_b.id, date(2024, 1, 15))
        assert moved is not None
        assert (moved.check_in, moved.check_out) == (date(2024, 1, 15), date(2024, 1, 17))

        response = await client.get(f"/api/v1/bookings/{booking.id}")
        assert response.json()["room_id"] == str(room_b.id)
        assert response.json()["check_in"] == "2024-01-15"
        assert response.json()["check_out"] == "2024-01-17"

    async def test_drop_on_missing_room_reports_error(self, client: AsyncClient, make_room, make_booking) -> None:
        room = await make_room("101")
        booking = await make_booking(room, date(2024, 1, 10), date(2024, 1, 12))

        view = CalendarView(HttpCalendarStore(client), month=date(2024, 1, 1))
        await view.load()
        view.drag_start(booking.id)

        assert await view.drop(DropTarget(room_id=uuid.uuid4(), day=date(2024, 1, 15))) is None

        assert view.notices[-1].level == "error"
        response = await client.get(f"/api/v1/bookings/{booking.id}")
        assert response.json()["check_in"] == "2024-01-10"

    async def test_garbled_rooms_response_keeps_bookings(self) -> None:
        room_id, booking_id = uuid.uuid4(), uuid.uuid4()

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/api/v1/rooms":
                return httpx.Response(200, text="<html>proxy error</html>")
            return httpx.Response(200, json={"items": [_booking_json(booking_id, room_id)], "total": 1})

        async with _mock_client(handler) as http:
            view = CalendarView(HttpCalendarStore(http), month=date(2024, 1, 1))
            await view.load()

        assert view.rooms == []
        assert [b.id for b in view.bookings] == [booking_id]
        assert view.loading is False

    async def test_unreadable_update_response_reports_error(self) -> None:
        room_id, booking_id = uuid.uuid4(), uuid.uuid4()

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "PATCH":
                return httpx.Response(200, json={"ok": True})
            if request.url.path == "/api/v1/rooms":
                return httpx.Response(200, json={"items": [], "total": 0})
            return httpx.Response(200, json={"items": [_booking_json(booking_id, room_id)], "total": 1})

        async with _mock_client(handler) as http:
            view = CalendarView(HttpCalendarStore(http), month=date(2024, 1, 1))
            await view.load()
            view.drag_start(booking_id)

            assert await view.drop(DropTarget(room_id=room_id, day=date(2024, 1, 20))) is None

        assert view.notices[-1].level == "error"
        assert view.notices[-1].description == "Failed to move booking"
        assert view.phase is DragPhase.IDLE
        assert view.active_booking is None


# ---------------------------------------------------------------------------
# SqlCalendarStore
# ---------------------------------------------------------------------------


class TestSqlCalendarStore:
    async def test_reads_month(self, session_factory, make_room, make_booking) -> None:
        room_b = await make_room("102")
        room_a = await make_room("101")
        await make_booking(room_a, date(2024, 1, 30), date(2024, 2, 2))
        await make_booking(room_b, date(2024, 3, 1), date(2024, 3, 2))

        store = SqlCalendarStore(session_factory)
        rooms = await store.list_rooms()
        bookings = await store.list_bookings(date(2024, 2, 1), date(2024, 2, 29))

        assert [r.room_number for r in rooms] == ["101", "102"]
        assert len(bookings) == 1
        assert bookings[0].room_id == room_a.id

    async def test_update_and_get(self, session_factory, make_room, make_guest, make_booking) -> None:
        room_a = await make_room("101")
        room_b = await make_room("102")
        guest = await make_guest("Sarah", "Johnson")
        booking = await make_booking(room_a, date(2024, 1, 10), date(2024, 1, 12), guest=guest)
        store = SqlCalendarStore(session_factory)

        updated = await store.update_booking(booking.id, room_b.id, date(2024, 1, 8), date(2024, 1, 10))
        fetched = await store.get_booking(booking.id)

        assert updated == fetched
        assert fetched.room_id == room_b.id
        assert (fetched.check_in, fetched.check_out) == (date(2024, 1, 8), date(2024, 1, 10))
        assert fetched.guest_label == "Sarah Johnson"

    async def test_unknown_booking_or_room(self, session_factory, make_room, make_booking) -> None:
        room = await make_room("101")
        booking = await make_booking(room, date(2024, 1, 10), date(2024, 1, 12))
        store = SqlCalendarStore(session_factory)

        with pytest.raises(RecordNotFound):
            await store.get_booking(uuid.uuid4())
        with pytest.raises(RecordNotFound):
            await store.update_booking(booking.id, uuid.uuid4(), date(2024, 1, 1), date(2024, 1, 3))

    async def test_view_load_with_concurrent_fetches(self, session_factory, make_room, make_booking) -> None:
        room = await make_room("101")
        await make_booking(room, date(2024, 1, 10), date(2024, 1, 12), status="pending")

        view = CalendarView(SqlCalendarStore(session_factory), month=date(2024, 1, 20), status_filter="pending")
        await view.load()

        assert len(view.rooms) == 1
        assert len(view.visible_bookings) == 1
