"""Booking calendar: month grid, cell placement, and drag-to-reschedule."""

from hotel_desk.calendar.reschedule import DropTarget, Reschedule
from hotel_desk.calendar.store import (
    CalendarStore,
    HttpCalendarStore,
    RecordNotFound,
    SqlCalendarStore,
    StoreError,
)
from hotel_desk.calendar.view import CalendarView, DragPhase, Notice

__all__ = [
    "CalendarStore",
    "CalendarView",
    "DragPhase",
    "DropTarget",
    "HttpCalendarStore",
    "Notice",
    "RecordNotFound",
    "Reschedule",
    "SqlCalendarStore",
    "StoreError",
]
