"""Booking model: tracks unit reservations."""

import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentledger.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Booking(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A reservation linking a guest to a unit for an inclusive date range."""

    __tablename__ = "bookings"

    unit_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("units.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guest_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("guests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    source: Mapped[str | None] = mapped_column(String(100), nullable=True)  # Booking.com, Airbnb, direct...
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    unit: Mapped["Unit"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    guest: Mapped["Guest"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (Index("ix_bookings_unit_id_start_date", "unit_id", "start_date"),)

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, unit_id={self.unit_id}, guest_id={self.guest_id}, "
            f"start_date={self.start_date}, end_date={self.end_date})>"
        )
