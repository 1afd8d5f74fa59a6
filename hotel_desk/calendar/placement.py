"""Placement of bookings onto (room, day) cells, and the status filter."""

import uuid
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from hotel_desk.models.booking import BOOKING_STATUSES
from hotel_desk.schemas.calendar import CalendarBooking, CalendarCell, CalendarRoom, CalendarRow

ALL_STATUSES = "all"
STATUS_FILTERS = (ALL_STATUSES, *BOOKING_STATUSES)


def filter_by_status(bookings: Sequence[CalendarBooking], status: str) -> list[CalendarBooking]:
    """Return the bookings visible under ``status``; the input is never modified.

    Raises:
        ValueError: If ``status`` is not ``"all"`` or a booking status.
    """
    if status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status!r}")
    if status == ALL_STATUSES:
        return list(bookings)
    return [b for b in bookings if b.status == status]


def occupies(booking: CalendarBooking, day: date) -> bool:
    """True when ``day`` falls in the stay [check_in, check_out), or is the check-in day."""
    return booking.check_in <= day < booking.check_out or day == booking.check_in


def booking_for_cell(
    bookings: Iterable[CalendarBooking],
    room_id: uuid.UUID,
    day: date,
) -> CalendarBooking | None:
    """Return the first booking in list order that occupies the cell.

    Overlapping bookings in the same room are not reported: later ones are
    simply hidden behind the first match.
    """
    for booking in bookings:
        if booking.room_id == room_id and occupies(booking, day):
            return booking
    return None


def build_cell(bookings: Iterable[CalendarBooking], room_id: uuid.UUID, day: date) -> CalendarCell:
    booking = booking_for_cell(bookings, room_id, day)
    if booking is None:
        return CalendarCell(day=day)
    return CalendarCell(
        day=day,
        booking_id=booking.id,
        is_start=day == booking.check_in,
        is_end=day == booking.check_out - timedelta(days=1),
    )


def build_rows(
    rooms: Sequence[CalendarRoom],
    bookings: Sequence[CalendarBooking],
    days: Sequence[date],
) -> list[CalendarRow]:
    """Lay out one row per room (in the given order) with one cell per day."""
    return [CalendarRow(room=room, cells=[build_cell(bookings, room.id, day) for day in days]) for room in rooms]
