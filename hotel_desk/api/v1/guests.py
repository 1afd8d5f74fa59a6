"""Guests CRUD API router — the guest directory."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_desk.api.deps import get_db
from hotel_desk.models.guest import Guest
from hotel_desk.schemas.common import MessageResponse
from hotel_desk.schemas.guest import (
    GuestCreate,
    GuestListResponse,
    GuestResponse,
    GuestUpdate,
)

router = APIRouter(prefix="/api/v1/guests", tags=["guests"])


async def _get_guest(guest_id: uuid.UUID, db: AsyncSession) -> Guest:
    guest = await db.get(Guest, guest_id)
    if guest is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guest not found",
        )
    return guest


async def _ensure_email_free(db: AsyncSession, email: str, exclude_guest_id: uuid.UUID | None = None) -> None:
    query = select(Guest).where(Guest.email == email)
    if exclude_guest_id is not None:
        query = query.where(Guest.id != exclude_guest_id)

    existing = await db.execute(query)
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Guest with this email already exists",
        )


@router.post(
    "",
    response_model=GuestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new guest",
)
async def create_guest(
    body: GuestCreate,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    """Create a new guest record.

    Raises 409 if a guest with the same email already exists.
    """
    await _ensure_email_free(db, body.email)

    guest = Guest(**body.model_dump())
    db.add(guest)
    await db.flush()
    await db.refresh(guest)
    return guest


@router.get(
    "",
    response_model=GuestListResponse,
    summary="List guests with optional search",
)
async def list_guests(
    search: str | None = Query(None, description="Search by first name, last name or email (case-insensitive)"),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(20, ge=1, le=100, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Return a paginated list of guests, newest first."""
    base_filter = []

    if search:
        search_pattern = f"%{search}%"
        base_filter.append(
            or_(
                Guest.first_name.ilike(search_pattern),
                Guest.last_name.ilike(search_pattern),
                Guest.email.ilike(search_pattern),
            )
        )

    # Total count
    count_query = select(func.count()).select_from(Guest).where(*base_filter)
    total_result = await db.execute(count_query)
    total = total_result.scalar_one()

    # Fetch page
    items_query = (
        select(Guest).where(*base_filter).order_by(Guest.created_at.desc(), Guest.last_name).offset(skip).limit(limit)
    )
    result = await db.execute(items_query)
    items = list(result.scalars().all())

    return {"items": items, "total": total}


@router.get(
    "/{guest_id}",
    response_model=GuestResponse,
    summary="Get a single guest",
)
async def get_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    return await _get_guest(guest_id, db)


@router.put(
    "/{guest_id}",
    response_model=GuestResponse,
    summary="Update a guest",
)
async def update_guest(
    guest_id: uuid.UUID,
    body: GuestUpdate,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    """Partially update a guest.

    If ``email`` changes, the new address must not belong to another guest.
    """
    guest = await _get_guest(guest_id, db)
    update_data = body.model_dump(exclude_unset=True)

    if "email" in update_data and update_data["email"] != guest.email:
        await _ensure_email_free(db, update_data["email"], exclude_guest_id=guest.id)

    for field, value in update_data.items():
        setattr(guest, field, value)

    db.add(guest)
    await db.flush()
    await db.refresh(guest)
    return guest


@router.delete(
    "/{guest_id}",
    response_model=MessageResponse,
    summary="Delete a guest",
)
async def delete_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete a guest. Their bookings are kept and lose the guest link."""
    guest = await _get_guest(guest_id, db)

    await db.delete(guest)
    await db.flush()
    return {"message": "Guest deleted"}
