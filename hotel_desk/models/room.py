"""Room model — the hotel's bookable inventory."""

from decimal import Decimal

from sqlalchemy import JSON, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_desk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin

ROOM_STATUSES = ("available", "occupied", "maintenance", "cleaning")


class Room(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A single bookable room, identified on screen by its room number."""

    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True, index=True)
    room_type: Mapped[str] = mapped_column(String(100), nullable=False)  # e.g. "Deluxe Suite"
    floor: Mapped[int] = mapped_column(Integer, default=1)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    max_occupancy: Mapped[int] = mapped_column(Integer, default=2)
    amenities: Mapped[list | None] = mapped_column(JSON, default=list)
    status: Mapped[str] = mapped_column(String(50), default="available", index=True)
    description: Mapped[str | None] = mapped_column(Text, default=None)

    # Relationships
    bookings: Mapped[list["Booking"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="room", lazy="select", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.room_number!r}, type={self.room_type!r}, status={self.status})>"
