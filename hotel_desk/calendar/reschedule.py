"""Day-delta arithmetic for drag-to-reschedule."""

import uuid
from dataclasses import dataclass
from datetime import date, timedelta

from hotel_desk.schemas.calendar import CalendarBooking


@dataclass(frozen=True)
class DropTarget:
    """The grid cell a booking bar was dropped on."""

    room_id: uuid.UUID
    day: date


@dataclass(frozen=True)
class Reschedule:
    """The single-record update produced by a drop."""

    booking_id: uuid.UUID
    room_id: uuid.UUID
    check_in: date
    check_out: date
    delta_days: int


def day_delta(check_in: date, target_day: date) -> int:
    """Whole days from the original check-in to the drop day (may be negative)."""
    return (target_day - check_in).days


def shift_stay(check_in: date, check_out: date, delta_days: int) -> tuple[date, date]:
    """Move both stay bounds by ``delta_days``; the stay's length is unchanged."""
    delta = timedelta(days=delta_days)
    return check_in + delta, check_out + delta


def plan_reschedule(booking: CalendarBooking, target: DropTarget) -> Reschedule:
    """Compute the room and dates ``booking`` moves to when dropped on ``target``.

    No availability check is made: the booking may land on days already
    taken in the target room.
    """
    delta = day_delta(booking.check_in, target.day)
    check_in, check_out = shift_stay(booking.check_in, booking.check_out, delta)
    return Reschedule(
        booking_id=booking.id,
        room_id=target.room_id,
        check_in=check_in,
        check_out=check_out,
        delta_days=delta,
    )
