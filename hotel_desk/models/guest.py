"""Guest domain model."""

import uuid
from datetime import datetime

from sqlalchemy import String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_desk.database import Base

ID_TYPES = ("passport", "drivers_license", "national_id")


class Guest(Base):
    """Guest model — people who stay in the hotel's rooms."""

    __tablename__ = "guests"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    address: Mapped[str | None] = mapped_column(String(255))
    id_type: Mapped[str] = mapped_column(String(50), default="passport")
    id_number: Mapped[str | None] = mapped_column(String(100))
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    # Bookings outlive the guest record; the link is cleared on delete.
    bookings: Mapped[list["Booking"]] = relationship(  # noqa: F821
        back_populates="guest", lazy="select"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
