"""Pydantic v2 schemas for the dashboard summary."""

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class RoomStatusItem(BaseModel):
    """A room on the status board, with the current stay when occupied."""

    id: uuid.UUID
    room_number: str
    room_type: str
    status: str
    guest_name: str | None = None
    check_out: date | None = None


class RecentBookingItem(BaseModel):
    """A row of the recent bookings table."""

    id: uuid.UUID
    guest_name: str | None = None
    room_number: str
    check_in: date
    check_out: date
    status: str
    total_amount: Decimal | None = None


class DashboardResponse(BaseModel):
    """Front-desk summary for today."""

    today: date
    total_rooms: int
    available_rooms: int
    occupied_rooms: int
    occupancy_rate: int  # percentage 0–100, rounded
    active_guests: int
    rooms: list[RoomStatusItem]
    recent_bookings: list[RecentBookingItem]
