"""Booking model — a stay in one room over a date range."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_desk.database import Base, TimestampMixin, UUIDPrimaryKeyMixin

BOOKING_STATUSES = ("confirmed", "pending", "checked-in", "checked-out", "cancelled")


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A reservation of a room for the half-open stay [check_in, check_out)."""

    __tablename__ = "bookings"

    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guest_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("guests.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    check_in: Mapped[date] = mapped_column(Date, nullable=False)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)
    adults: Mapped[int] = mapped_column(Integer, default=1)
    children: Mapped[int] = mapped_column(Integer, default=0)
    status: Mapped[str] = mapped_column(
        String(50),
        default="pending",
        index=True,
    )  # confirmed, pending, checked-in, checked-out, cancelled
    total_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    room: Mapped["Room"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    guest: Mapped["Guest"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        Index("ix_bookings_check_in", "check_in"),
        CheckConstraint("check_out > check_in", name="ck_bookings_stay_dates"),
    )

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, room_id={self.room_id}, guest_id={self.guest_id}, status={self.status})>"
