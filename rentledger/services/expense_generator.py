"""Recurring expense generator.

Turns active fixed-expense templates into dated variable expenses. Meant to be
run by a scheduler (see ``scripts/generate_fixed_expenses.py``); each due
template produces at most one generated expense per calendar month.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date

from rentledger.config import settings
from rentledger.models.expense import FixedExpense
from rentledger.repositories.expenses import ExpenseStore

logger = logging.getLogger(__name__)

MONTHLY = "MONTHLY"
ANNUAL = "ANNUAL"
RECURRENCE_TYPES = (MONTHLY, ANNUAL)


# ---------------------------------------------------------------------------
# Date arithmetic
# ---------------------------------------------------------------------------


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by ``months``, clamping the day to the target month's length."""
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_years(value: date, years: int) -> date:
    return add_months(value, years * 12)


def months_between(start: date, current: date) -> int:
    """Whole calendar months from ``start``'s month to ``current``'s month."""
    return (current.year - start.year) * 12 + (current.month - start.month)


def month_window(as_of: date) -> tuple[date, date]:
    """Return ``(first day of as_of's month, first day of the next month)``."""
    start = as_of.replace(day=1)
    return start, add_months(start, 1)


# ---------------------------------------------------------------------------
# Due-date rules
# ---------------------------------------------------------------------------


def next_occurrence(expense: FixedExpense, as_of: date) -> date:
    """Occurrence of ``expense`` that falls in ``as_of``'s month (MONTHLY) or year (ANNUAL)."""
    if expense.recurrence == MONTHLY:
        return add_months(expense.start_date, months_between(expense.start_date, as_of))
    if expense.recurrence == ANNUAL:
        return add_years(expense.start_date, as_of.year - expense.start_date.year)
    raise ValueError(f"Unknown recurrence {expense.recurrence!r}")


def is_due(expense: FixedExpense, as_of: date) -> bool:
    """Whether ``expense`` has an occurrence in ``as_of``'s month on or before ``as_of``."""
    if expense.start_date > as_of:
        return False
    occurrence = next_occurrence(expense, as_of)
    # MONTHLY occurrences always land in as_of's month; ANNUAL ones only in the anniversary month.
    same_month = occurrence.year == as_of.year and occurrence.month == as_of.month
    return same_month and occurrence.day <= as_of.day


def is_active(expense: FixedExpense, as_of: date) -> bool:
    return expense.end_date is None or expense.end_date >= as_of


def generated_description(description: str) -> str:
    return f"{settings.generated_expense_prefix}{description}"


def category_for(recurrence: str) -> str:
    if recurrence == MONTHLY:
        return settings.monthly_expense_category
    return settings.annual_expense_category


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


async def generate_due_expenses(store: ExpenseStore, as_of: date) -> int:
    """Create the variable expenses that are due on ``as_of``.

    Every template is processed independently: an error on one is logged with
    the template id and the run carries on with the others.

    Returns:
        Number of variable expenses created by this run.
    """
    logger.info("Generating fixed expenses for %s", as_of.isoformat())

    fixed_expenses = await store.list_active_fixed_expenses(as_of)
    logger.info("Found %d active fixed expenses", len(fixed_expenses))

    window_start, window_end = month_window(as_of)
    generated = 0

    for expense in fixed_expenses:
        try:
            # Stores may return a superset; never generate past end_date.
            if not is_active(expense, as_of) or not is_due(expense, as_of):
                continue

            description = generated_description(expense.description)
            async with store.savepoint():
                existing = await store.find_generated_expense(
                    expense.property_id,
                    expense.unit_id,
                    description,
                    window_start,
                    window_end,
                )
                if existing is not None:
                    logger.debug("Expense %s already generated on %s", expense.id, existing.date)
                    continue

                await store.create_variable_expense(
                    property_id=expense.property_id,
                    unit_id=expense.unit_id,
                    expense_date=as_of,
                    description=description,
                    amount=expense.amount,
                    category=category_for(expense.recurrence),
                )
            generated += 1
            logger.info(
                "Generated expense %r for property %s (unit %s)",
                expense.description,
                expense.property_id,
                expense.unit_id,
            )
        except Exception:
            logger.exception("Error processing fixed expense %s", expense.id)

    logger.info("Generated %d new expenses", generated)
    return generated
