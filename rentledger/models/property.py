"""Property model: a building or estate containing rentable units."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentledger.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Property(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A managed property. Units and expenses are deleted along with it."""

    __tablename__ = "properties"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)

    # Relationships
    units: Mapped[list["Unit"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="property",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Unit.name",
    )
    fixed_expenses: Mapped[list["FixedExpense"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="property", cascade="all, delete-orphan", passive_deletes=True
    )
    variable_expenses: Mapped[list["VariableExpense"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="property", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.name!r})>"
