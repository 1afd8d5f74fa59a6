"""Pydantic v2 request/response schemas for guest endpoints."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

_ID_TYPE_PATTERN = "^(passport|drivers_license|national_id)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestCreate(BaseModel):
    """Schema for creating a new guest."""

    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=255)
    id_type: str = Field("passport", pattern=_ID_TYPE_PATTERN)
    id_number: str | None = Field(None, max_length=100)


class GuestUpdate(BaseModel):
    """Schema for partially updating a guest. All fields optional."""

    first_name: str | None = Field(None, min_length=2, max_length=100)
    last_name: str | None = Field(None, min_length=2, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=255)
    id_type: str | None = Field(None, pattern=_ID_TYPE_PATTERN)
    id_number: str | None = Field(None, max_length=100)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class GuestName(BaseModel):
    """Minimal guest display fields joined onto bookings."""

    first_name: str
    last_name: str

    model_config = ConfigDict(from_attributes=True)


class GuestResponse(BaseModel):
    """Guest information returned by the API."""

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    address: str | None = None
    id_type: str
    id_number: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GuestListResponse(BaseModel):
    """Paginated list of guests."""

    items: list[GuestResponse]
    total: int
