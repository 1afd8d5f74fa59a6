"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hotel_desk.schemas.guest import GuestCreate, GuestName, GuestResponse
from hotel_desk.schemas.room import RoomResponse

_STATUS_PATTERN = "^(confirmed|pending|checked-in|checked-out|cancelled)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Booking intake: guest details plus the room and stay.

    The guest is matched by email; a new guest record is created when no
    guest with that email exists yet.
    """

    guest: GuestCreate
    room_id: uuid.UUID
    check_in: date
    check_out: date
    adults: int = Field(1, ge=1)
    children: int = Field(0, ge=0)
    special_requests: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that check_out is strictly after check_in."""
        if self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


class BookingUpdate(BaseModel):
    """Schema for partially updating a booking. All fields optional."""

    room_id: uuid.UUID | None = None
    guest_id: uuid.UUID | None = None
    check_in: date | None = None
    check_out: date | None = None
    adults: int | None = Field(None, ge=1)
    children: int | None = Field(None, ge=0)
    status: str | None = Field(None, pattern=_STATUS_PATTERN)
    total_amount: Decimal | None = Field(None, ge=0)
    special_requests: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "BookingUpdate":
        """If both dates are provided, validate check_out > check_in."""
        if self.check_in is not None and self.check_out is not None and self.check_out <= self.check_in:
            raise ValueError("check_out must be after check_in")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Standard booking response, with the guest's display name joined in."""

    id: uuid.UUID
    room_id: uuid.UUID
    guest_id: uuid.UUID | None = None
    check_in: date
    check_out: date
    adults: int
    children: int
    status: str
    total_amount: Decimal | None = None
    special_requests: str | None = None
    created_at: datetime
    updated_at: datetime
    guest: GuestName | None = None

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    """Extended booking response with nested room and full guest details."""

    room: RoomResponse | None = None
    guest: GuestResponse | None = None  # type: ignore[assignment]


class BookingListResponse(BaseModel):
    """List of bookings."""

    items: list[BookingResponse]
    total: int
