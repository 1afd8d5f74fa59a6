"""Pydantic v2 schemas for the booking calendar.

``CalendarRoom`` and ``CalendarBooking`` are the minimal records the
calendar keeps in memory. They validate equally from ORM objects and from
the JSON returned by the rooms/bookings endpoints.
"""

import uuid
from datetime import date

from pydantic import BaseModel, ConfigDict, computed_field

from hotel_desk.schemas.guest import GuestName


class CalendarRoom(BaseModel):
    """A grid row header."""

    id: uuid.UUID
    room_number: str
    room_type: str

    model_config = ConfigDict(from_attributes=True)


class CalendarBooking(BaseModel):
    """A booking as placed on the grid."""

    id: uuid.UUID
    room_id: uuid.UUID
    check_in: date
    check_out: date
    status: str
    guest: GuestName | None = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def guest_label(self) -> str:
        """Name shown on the booking bar and the drag overlay."""
        if self.guest is None:
            return ""
        return f"{self.guest.first_name} {self.guest.last_name}"


class CalendarCell(BaseModel):
    """One (room, day) cell."""

    day: date
    booking_id: uuid.UUID | None = None
    is_start: bool = False
    is_end: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def shows_bar(self) -> bool:
        """A booking bar is drawn only in the check-in cell."""
        return self.booking_id is not None and self.is_start


class CalendarRow(BaseModel):
    """A room and its cells for every day of the month."""

    room: CalendarRoom
    cells: list[CalendarCell]


class CalendarResponse(BaseModel):
    """Month layout returned by ``GET /api/v1/calendar``."""

    month_start: date
    month_end: date
    status_filter: str
    days: list[date]
    rooms: list[CalendarRoom]
    bookings: list[CalendarBooking]
    rows: list[CalendarRow]


class BookingMove(BaseModel):
    """A drop of ``booking_id`` onto the cell (``room_id``, ``day``)."""

    booking_id: uuid.UUID
    room_id: uuid.UUID
    day: date


class BookingMoveResponse(BaseModel):
    """Result of a calendar move."""

    booking: CalendarBooking
    delta_days: int
