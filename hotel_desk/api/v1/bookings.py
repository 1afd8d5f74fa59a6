"""Bookings API router — booking intake, listing, and single-record updates.

``PATCH /{booking_id}`` is the write the booking calendar issues when a
bar is dragged to another room or day. It performs no availability
check; overlapping stays are accepted.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_desk.api.deps import get_db
from hotel_desk.models.booking import Booking
from hotel_desk.models.guest import Guest
from hotel_desk.models.room import Room
from hotel_desk.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingListResponse,
    BookingResponse,
    BookingUpdate,
)
from hotel_desk.schemas.common import MessageResponse

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])

logger = logging.getLogger(__name__)

# Columns that cannot be cleared through a PATCH; an explicit null is ignored.
_REQUIRED_FIELDS = frozenset({"room_id", "check_in", "check_out", "adults", "children", "status"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _load_booking(booking_id: uuid.UUID, db: AsyncSession) -> Booking:
    """Fetch a booking with its room and guest freshly loaded.

    Raises ``HTTPException 404`` when the booking does not exist.
    """
    result = await db.execute(
        select(Booking)
        .options(selectinload(Booking.room), selectinload(Booking.guest))
        .where(Booking.id == booking_id)
        .execution_options(populate_existing=True)
    )
    booking = result.scalar_one_or_none()

    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return booking


async def _require(db: AsyncSession, model: type, record_id: uuid.UUID, detail: str):
    record = await db.get(model, record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return record


async def _find_or_create_guest(db: AsyncSession, body: BookingCreate) -> Guest:
    """Return the guest with the intake email, creating one if none exists."""
    result = await db.execute(select(Guest).where(Guest.email == body.guest.email))
    guest = result.scalar_one_or_none()
    if guest is not None:
        return guest

    guest = Guest(**body.guest.model_dump())
    db.add(guest)
    await db.flush()
    return guest


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a booking from the intake form",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Create a confirmed booking for an available room.

    - The room must exist and be ``available``.
    - The guest is looked up by email and created when missing.
    - ``total_amount`` is nights × the room's nightly price.
    - The room is marked ``occupied`` once the booking is stored.
    """
    room = await _require(db, Room, body.room_id, "Room not found")
    if room.status != "available":
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Room is not available",
        )

    guest = await _find_or_create_guest(db, body)

    booking = Booking(
        room_id=room.id,
        guest_id=guest.id,
        check_in=body.check_in,
        check_out=body.check_out,
        adults=body.adults,
        children=body.children,
        status="confirmed",
        special_requests=body.special_requests,
    )
    booking.total_amount = room.price_per_night * booking.nights
    db.add(booking)
    room.status = "occupied"
    await db.flush()

    logger.info("Booked room %s for guest %s, %s..%s", room.room_number, guest.id, body.check_in, body.check_out)
    return await _load_booking(booking.id, db)


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List bookings",
)
async def list_bookings(
    room_id: uuid.UUID | None = Query(None, description="Filter by room"),
    guest_id: uuid.UUID | None = Query(None, description="Filter by guest"),
    status_filter: str | None = Query(None, alias="status", description="Filter by booking status"),
    stay_from: date | None = Query(None, description="Bookings with check_out >= this date"),
    stay_to: date | None = Query(None, description="Bookings with check_in <= this date"),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int | None = Query(None, ge=1, le=1000, description="Pagination limit (all when omitted)"),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Return bookings ordered by check-in, each with the guest's name."""
    filters = []
    if room_id is not None:
        filters.append(Booking.room_id == room_id)
    if guest_id is not None:
        filters.append(Booking.guest_id == guest_id)
    if status_filter is not None:
        filters.append(Booking.status == status_filter)
    if stay_from is not None:
        filters.append(Booking.check_out >= stay_from)
    if stay_to is not None:
        filters.append(Booking.check_in <= stay_to)

    # Total count
    count_query = select(func.count()).select_from(Booking).where(*filters)
    total = (await db.execute(count_query)).scalar_one()

    # Fetch page
    items_query = (
        select(Booking)
        .options(selectinload(Booking.guest))
        .where(*filters)
        .order_by(Booking.check_in, Booking.created_at)
        .offset(skip)
    )
    if limit is not None:
        items_query = items_query.limit(limit)
    result = await db.execute(items_query)
    items = list(result.scalars().all())

    return {"items": items, "total": total}


@router.get(
    "/{booking_id}",
    response_model=BookingDetailResponse,
    summary="Get booking detail with nested room and guest",
)
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    return await _load_booking(booking_id, db)


@router.patch(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Update a booking",
)
async def update_booking(
    booking_id: uuid.UUID,
    body: BookingUpdate,
    db: AsyncSession = Depends(get_db),
) -> Booking:
    """Partially update a single booking.

    Verifies that a new room or guest exists and that the effective stay
    still ends after it starts. Overlaps with other bookings are not checked.
    """
    booking = await _load_booking(booking_id, db)
    update_data = body.model_dump(exclude_unset=True)

    if update_data.get("room_id") is not None and update_data["room_id"] != booking.room_id:
        await _require(db, Room, update_data["room_id"], "Room not found")

    if update_data.get("guest_id") is not None and update_data["guest_id"] != booking.guest_id:
        await _require(db, Guest, update_data["guest_id"], "Guest not found")

    effective_check_in = update_data.get("check_in") or booking.check_in
    effective_check_out = update_data.get("check_out") or booking.check_out
    if effective_check_out <= effective_check_in:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="check_out must be after check_in",
        )

    for field, value in update_data.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(booking, field, value)

    db.add(booking)
    await db.flush()
    return await _load_booking(booking.id, db)


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Delete a booking",
)
async def delete_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    booking = await _load_booking(booking_id, db)

    await db.delete(booking)
    await db.flush()
    return {"message": "Booking deleted"}
