"""Shared API dependencies — single import point for all routers.

Re-exports the database session dependency and provides the calendar's
record store so that router modules can import everything from one place::

    from hotel_desk.api.deps import get_calendar_store, get_db
"""

from hotel_desk.calendar.store import CalendarStore, SqlCalendarStore
from hotel_desk.database import async_session_factory, get_db


def get_calendar_store() -> CalendarStore:
    """Return the in-process record store used by the calendar endpoints."""
    return SqlCalendarStore(async_session_factory)


__all__ = [
    "get_db",
    "get_calendar_store",
]
