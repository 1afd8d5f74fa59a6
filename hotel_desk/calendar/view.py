"""Calendar view-model: month navigation, status filter, and drag-to-reschedule.

State changes only through the methods below. A drag moves through
``IDLE -> DRAGGING -> COMMITTING -> IDLE``; a drop outside the grid goes
straight back to ``IDLE``.
"""

import asyncio
import enum
import logging
import uuid
from dataclasses import dataclass
from datetime import date

from hotel_desk.calendar.grid import month_bounds, month_days, shift_month
from hotel_desk.calendar.placement import (
    ALL_STATUSES,
    STATUS_FILTERS,
    booking_for_cell,
    build_rows,
    filter_by_status,
)
from hotel_desk.calendar.reschedule import DropTarget, Reschedule, plan_reschedule
from hotel_desk.calendar.store import CalendarStore, StoreError
from hotel_desk.schemas.calendar import CalendarBooking, CalendarResponse, CalendarRoom, CalendarRow

logger = logging.getLogger(__name__)


class DragPhase(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"


@dataclass(frozen=True)
class Notice:
    """A message for the person at the desk."""

    level: str  # success, error
    title: str
    description: str


class CalendarView:
    """Rooms × days grid for one month, backed by a ``CalendarStore``.

    The view holds a transient copy of the month's rooms and bookings; the
    store stays the source of truth and nothing here is mutated locally
    after a write. Call :meth:`load` after construction.
    """

    def __init__(
        self,
        store: CalendarStore,
        month: date | None = None,
        status_filter: str = ALL_STATUSES,
    ):
        if status_filter not in STATUS_FILTERS:
            raise ValueError(f"Unknown status filter: {status_filter!r}")
        self.store = store
        self.current_month = month or date.today()
        self.status_filter = status_filter
        self.rooms: list[CalendarRoom] = []
        self.bookings: list[CalendarBooking] = []
        self.loading = False
        self.phase = DragPhase.IDLE
        self.active_booking: CalendarBooking | None = None
        self.notices: list[Notice] = []

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def days(self) -> list[date]:
        return month_days(self.current_month)

    @property
    def visible_bookings(self) -> list[CalendarBooking]:
        return filter_by_status(self.bookings, self.status_filter)

    def rows(self) -> list[CalendarRow]:
        return build_rows(self.rooms, self.visible_bookings, self.days)

    def booking_at(self, room_id: uuid.UUID, day: date) -> CalendarBooking | None:
        return booking_for_cell(self.visible_bookings, room_id, day)

    def snapshot(self) -> CalendarResponse:
        first, last = month_bounds(self.current_month)
        visible = self.visible_bookings
        return CalendarResponse(
            month_start=first,
            month_end=last,
            status_filter=self.status_filter,
            days=self.days,
            rooms=self.rooms,
            bookings=visible,
            rows=build_rows(self.rooms, visible, self.days),
        )

    # ------------------------------------------------------------------
    # Fetching and navigation
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Fetch the month's rooms and bookings concurrently.

        Each fetch fails on its own: the failed list comes back empty and
        the other is still applied. Failures are logged, not shown.
        """
        self.loading = True
        first, last = month_bounds(self.current_month)
        try:
            rooms, bookings = await asyncio.gather(
                self.store.list_rooms(),
                self.store.list_bookings(first, last),
                return_exceptions=True,
            )
        finally:
            self.loading = False

        self.rooms = self._settle(rooms, "rooms")
        self.bookings = self._settle(bookings, "bookings")

    @staticmethod
    def _settle(result: object, what: str) -> list:
        if isinstance(result, StoreError):
            logger.warning("Calendar fetch of %s failed: %s", what, result)
            return []
        if isinstance(result, BaseException):
            raise result
        return result  # type: ignore[return-value]

    async def go_to_month(self, reference: date) -> None:
        self.current_month = reference
        await self.load()

    async def next_month(self) -> None:
        await self.go_to_month(shift_month(self.current_month, 1))

    async def previous_month(self) -> None:
        await self.go_to_month(shift_month(self.current_month, -1))

    def set_status_filter(self, status: str) -> None:
        """Change which bookings are placed; the fetched list is left as is."""
        if status not in STATUS_FILTERS:
            raise ValueError(f"Unknown status filter: {status!r}")
        self.status_filter = status

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------

    def drag_start(self, booking_id: uuid.UUID) -> CalendarBooking | None:
        """Pick up a visible booking bar. Unknown ids leave the view idle."""
        booking = next((b for b in self.visible_bookings if b.id == booking_id), None)
        if booking is None:
            return None
        self.active_booking = booking
        self.phase = DragPhase.DRAGGING
        return booking

    async def drop(self, target: DropTarget | None) -> Reschedule | None:
        """Release the active booking on ``target`` and persist the move.

        Returns the applied reschedule, or ``None`` when nothing was written
        (no target, no active booking, or the update failed).
        """
        booking = self.active_booking
        self.active_booking = None
        self.phase = DragPhase.IDLE

        if target is None or booking is None:
            return None

        plan = plan_reschedule(booking, target)
        self.phase = DragPhase.COMMITTING
        try:
            await self.store.update_booking(plan.booking_id, plan.room_id, plan.check_in, plan.check_out)
        except StoreError as exc:
            logger.warning("Moving booking %s failed: %s", plan.booking_id, exc)
            self.notices.append(Notice("error", "Error", "Failed to move booking"))
            return None
        finally:
            self.phase = DragPhase.IDLE

        logger.info(
            "Moved booking %s to room %s, %s..%s (%+d days)",
            plan.booking_id,
            plan.room_id,
            plan.check_in,
            plan.check_out,
            plan.delta_days,
        )
        self.notices.append(Notice("success", "Success", "Booking moved successfully"))
        await self.load()
        return plan
