"""Rooms CRUD API router."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.api.deps import get_db
from hotel_desk.calendar.store import rooms_query
from hotel_desk.models.room import Room
from hotel_desk.schemas.common import MessageResponse
from hotel_desk.schemas.room import (
    RoomCreate,
    RoomListResponse,
    RoomResponse,
    RoomStatusUpdate,
    RoomUpdate,
)

router = APIRouter(prefix="/api/v1/rooms", tags=["rooms"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_room(room_id: uuid.UUID, db: AsyncSession) -> Room:
    """Fetch a room or raise ``HTTPException 404``."""
    room = await db.get(Room, room_id)
    if room is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Room not found",
        )
    return room


async def _ensure_room_number_free(
    db: AsyncSession,
    room_number: str,
    exclude_room_id: uuid.UUID | None = None,
) -> None:
    """Raise 409 if another room already uses ``room_number``."""
    query = select(Room).where(Room.room_number == room_number)
    if exclude_room_id is not None:
        query = query.where(Room.id != exclude_room_id)

    result = await db.execute(query)
    if result.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Room number already exists",
        )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new room",
)
async def create_room(
    body: RoomCreate,
    db: AsyncSession = Depends(get_db),
) -> Room:
    """Create a room. Room numbers are unique across the hotel."""
    await _ensure_room_number_free(db, body.room_number)

    room = Room(**body.model_dump())
    db.add(room)
    await db.flush()
    await db.refresh(room)
    return room


@router.get(
    "",
    response_model=RoomListResponse,
    summary="List rooms ordered by room number",
)
async def list_rooms(
    status_filter: str | None = Query(None, alias="status", description="Filter by room status"),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Return every room, ordered by room number."""
    query = rooms_query()
    if status_filter is not None:
        query = query.where(Room.status == status_filter)

    result = await db.execute(query)
    items = list(result.scalars().all())
    return {"items": items, "total": len(items)}


@router.get(
    "/{room_id}",
    response_model=RoomResponse,
    summary="Get a single room",
)
async def get_room(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Room:
    return await _get_room(room_id, db)


@router.put(
    "/{room_id}",
    response_model=RoomResponse,
    summary="Update a room",
)
async def update_room(
    room_id: uuid.UUID,
    body: RoomUpdate,
    db: AsyncSession = Depends(get_db),
) -> Room:
    """Partially update a room. Only fields present in the body are changed."""
    room = await _get_room(room_id, db)
    update_data = body.model_dump(exclude_unset=True)

    if "room_number" in update_data and update_data["room_number"] != room.room_number:
        await _ensure_room_number_free(db, update_data["room_number"], exclude_room_id=room.id)

    for field, value in update_data.items():
        setattr(room, field, value)

    db.add(room)
    await db.flush()
    await db.refresh(room)
    return room


@router.patch(
    "/{room_id}/status",
    response_model=RoomResponse,
    summary="Change a room's housekeeping status",
)
async def update_room_status(
    room_id: uuid.UUID,
    body: RoomStatusUpdate,
    db: AsyncSession = Depends(get_db),
) -> Room:
    room = await _get_room(room_id, db)
    room.status = body.status
    await db.flush()
    await db.refresh(room)
    return room


@router.delete(
    "/{room_id}",
    response_model=MessageResponse,
    summary="Delete a room",
)
async def delete_room(
    room_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete a room together with its bookings."""
    room = await _get_room(room_id, db)

    await db.delete(room)
    await db.flush()
    return {"message": "Room deleted"}
