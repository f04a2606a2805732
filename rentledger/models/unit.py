"""Unit model: a rentable room or apartment within a property."""

import uuid
from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentledger.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Unit(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A rentable unit. Bookings are always made against a unit."""

    __tablename__ = "units"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit_type: Mapped[str] = mapped_column(String(20), nullable=False, default="ROOM")  # ROOM, APARTMENT
    beds: Mapped[int] = mapped_column(Integer, default=1)
    baths: Mapped[int] = mapped_column(Integer, default=1)
    surface: Mapped[int | None] = mapped_column(Integer, default=None)  # square metres
    base_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)

    # Relationships
    property: Mapped["Property"] = relationship(back_populates="units", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    bookings: Mapped[list["Booking"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="unit", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Unit(id={self.id}, property_id={self.property_id}, name={self.name!r})>"
