"""Profit and loss calculation for a property over a month or a year."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.config import settings
from rentledger.models.booking import Booking
from rentledger.models.expense import VariableExpense
from rentledger.models.unit import Unit
from rentledger.services.expense_generator import add_months

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class ProfitAndLoss:
    period_start: date
    period_end: date
    revenue: Decimal
    fixed_expenses: Decimal
    variable_expenses: Decimal

    @property
    def margin(self) -> Decimal:
        return self.revenue - self.fixed_expenses - self.variable_expenses

    @property
    def margin_percentage(self) -> Decimal:
        if self.revenue == 0:
            return Decimal("0.00")
        rate = self.margin * 100 / self.revenue
        return rate.quantize(_CENTS, rounding=ROUND_HALF_UP)


def report_period(year: int, month: int | None = None) -> tuple[date, date]:
    """Return the ``[start, end)`` range for a calendar month, or the whole year if ``month`` is None."""
    if month is None:
        return date(year, 1, 1), date(year + 1, 1, 1)
    start = date(year, month, 1)
    return start, add_months(start, 1)


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(_CENTS, rounding=ROUND_HALF_UP)


async def build_pl_report(
    db: AsyncSession,
    property_id: uuid.UUID,
    year: int,
    month: int | None = None,
) -> ProfitAndLoss:
    """Aggregate revenue and costs of ``property_id`` for the requested period.

    Revenue is the price of bookings starting in the period. Generated
    variable expenses (description carries the auto prefix) count as fixed
    costs; the rest count as variable costs.
    """
    period_start, period_end = report_period(year, month)

    revenue_result = await db.execute(
        select(func.coalesce(func.sum(Booking.price), 0))
        .join(Unit, Booking.unit_id == Unit.id)
        .where(
            Unit.property_id == property_id,
            Booking.start_date >= period_start,
            Booking.start_date < period_end,
        )
    )

    is_generated = VariableExpense.description.startswith(settings.generated_expense_prefix, autoescape=True)
    expense_filters = (
        VariableExpense.property_id == property_id,
        VariableExpense.date >= period_start,
        VariableExpense.date < period_end,
    )
    fixed_result = await db.execute(
        select(func.coalesce(func.sum(VariableExpense.amount), 0)).where(*expense_filters, is_generated)
    )
    variable_result = await db.execute(
        select(func.coalesce(func.sum(VariableExpense.amount), 0)).where(*expense_filters, ~is_generated)
    )

    return ProfitAndLoss(
        period_start=period_start,
        period_end=period_end,
        revenue=_money(revenue_result.scalar_one()),
        fixed_expenses=_money(fixed_result.scalar_one()),
        variable_expenses=_money(variable_result.scalar_one()),
    )
