"""Dashboard API router — today's room board and recent bookings."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_desk.api.deps import get_db
from hotel_desk.calendar.store import rooms_query
from hotel_desk.models.booking import Booking
from hotel_desk.schemas.dashboard import DashboardResponse, RecentBookingItem, RoomStatusItem

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])

RECENT_BOOKINGS_LIMIT = 5

# Statuses of a stay that is currently holding its room.
_IN_HOUSE_STATUSES = ("checked-in", "confirmed")


def _occupancy_rate(occupied: int, total: int) -> int:
    """Percentage of rooms occupied, rounded half up to a whole number."""
    if total == 0:
        return 0
    rate = Decimal(occupied * 100) / Decimal(total)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    on: date | None = Query(None, description="Day to report on; defaults to today"),
    db: AsyncSession = Depends(get_db),
) -> DashboardResponse:
    """Summarise room statuses, in-house guests and the latest bookings."""
    today = on or date.today()

    rooms = list((await db.execute(rooms_query())).scalars().all())

    # Stays covering today, earliest check-in first
    stays_result = await db.execute(
        select(Booking)
        .options(selectinload(Booking.guest))
        .where(
            Booking.status.in_(_IN_HOUSE_STATUSES),
            Booking.check_in <= today,
            Booking.check_out > today,
        )
        .order_by(Booking.check_in)
    )
    stays = list(stays_result.scalars().all())

    current_stay: dict[uuid.UUID, Booking] = {}
    for stay in stays:
        current_stay.setdefault(stay.room_id, stay)

    board: list[RoomStatusItem] = []
    for room in rooms:
        item = RoomStatusItem(
            id=room.id,
            room_number=room.room_number,
            room_type=room.room_type,
            status=room.status,
        )
        stay = current_stay.get(room.id)
        if room.status == "occupied" and stay is not None:
            item.guest_name = stay.guest.full_name if stay.guest else None
            item.check_out = stay.check_out
        board.append(item)

    recent_result = await db.execute(
        select(Booking)
        .options(selectinload(Booking.room), selectinload(Booking.guest))
        .order_by(Booking.created_at.desc(), Booking.check_in.desc())
        .limit(RECENT_BOOKINGS_LIMIT)
    )
    recent = [
        RecentBookingItem(
            id=b.id,
            guest_name=b.guest.full_name if b.guest else None,
            room_number=b.room.room_number,
            check_in=b.check_in,
            check_out=b.check_out,
            status=b.status,
            total_amount=b.total_amount,
        )
        for b in recent_result.scalars().all()
    ]

    available = sum(1 for room in rooms if room.status == "available")
    occupied = sum(1 for room in rooms if room.status == "occupied")

    return DashboardResponse(
        today=today,
        total_rooms=len(rooms),
        available_rooms=available,
        occupied_rooms=occupied,
        occupancy_rate=_occupancy_rate(occupied, len(rooms)),
        active_guests=sum(1 for stay in stays if stay.status == "checked-in"),
        rooms=board,
        recent_bookings=recent,
    )
