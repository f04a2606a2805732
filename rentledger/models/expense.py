"""Expense models: recurring templates and dated one-off charges."""

import datetime as dt
import uuid
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentledger.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class FixedExpense(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Recurring cost template (rent, insurance, taxes).

    Active while ``end_date`` is null or not yet passed. Materialised as
    :class:`VariableExpense` rows by the recurring expense generator.
    """

    __tablename__ = "fixed_expenses"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    unit_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("units.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    recurrence: Mapped[str] = mapped_column(String(20), nullable=False)  # MONTHLY, ANNUAL
    start_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    # Relationships
    property: Mapped["Property"] = relationship(back_populates="fixed_expenses", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    unit: Mapped["Unit | None"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    def __repr__(self) -> str:
        return f"<FixedExpense(id={self.id}, description={self.description!r}, recurrence={self.recurrence})>"


class VariableExpense(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A dated charge, entered by hand or generated from a fixed expense."""

    __tablename__ = "variable_expenses"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    unit_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("units.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Relationships
    property: Mapped["Property"] = relationship(back_populates="variable_expenses", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (Index("ix_variable_expenses_property_id_date", "property_id", "date"),)

    def __repr__(self) -> str:
        return f"<VariableExpense(id={self.id}, date={self.date}, description={self.description!r})>"
