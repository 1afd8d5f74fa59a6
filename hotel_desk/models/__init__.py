"""SQLAlchemy models for Hotel Desk.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from hotel_desk.models.booking import Booking
from hotel_desk.models.guest import Guest
from hotel_desk.models.room import Room

__all__ = [
    "Booking",
    "Guest",
    "Room",
]
