"""Pydantic v2 request/response schemas for room endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

_ROOM_STATUS_PATTERN = "^(available|occupied|maintenance|cleaning)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RoomCreate(BaseModel):
    """Schema for creating a new room."""

    room_number: str = Field(..., min_length=1, max_length=20)
    room_type: str = Field("Standard Room", min_length=1, max_length=100)
    floor: int = Field(1, ge=0)
    price_per_night: Decimal = Field(Decimal("100"), ge=0)
    max_occupancy: int = Field(2, ge=1)
    amenities: list[str] = Field(default_factory=list)
    status: str = Field("available", pattern=_ROOM_STATUS_PATTERN)
    description: str | None = None


class RoomUpdate(BaseModel):
    """Schema for partially updating a room. All fields optional."""

    room_number: str | None = Field(None, min_length=1, max_length=20)
    room_type: str | None = Field(None, min_length=1, max_length=100)
    floor: int | None = Field(None, ge=0)
    price_per_night: Decimal | None = Field(None, ge=0)
    max_occupancy: int | None = Field(None, ge=1)
    amenities: list[str] | None = None
    status: str | None = Field(None, pattern=_ROOM_STATUS_PATTERN)
    description: str | None = None


class RoomStatusUpdate(BaseModel):
    """Quick status change from the room board."""

    status: str = Field(..., pattern=_ROOM_STATUS_PATTERN)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RoomResponse(BaseModel):
    """Room information returned from the API."""

    id: uuid.UUID
    room_number: str
    room_type: str
    floor: int
    price_per_night: Decimal
    max_occupancy: int
    amenities: list | None = None
    status: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoomListResponse(BaseModel):
    """List of rooms ordered by room number."""

    items: list[RoomResponse]
    total: int
