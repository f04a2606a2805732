"""Expense store: the queries and writes the recurring expense generator needs."""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.models.expense import FixedExpense, VariableExpense


class ExpenseStore(Protocol):
    """Persistence operations used by :func:`generate_due_expenses`."""

    def savepoint(self) -> AbstractAsyncContextManager[object]:
        """Scope for one template's lookup and insert, rolled back on error."""
        ...

    async def list_active_fixed_expenses(self, as_of: date) -> Sequence[FixedExpense]:
        """Fixed expenses with no end date or an end date on/after ``as_of``."""
        ...

    async def find_generated_expense(
        self,
        property_id: uuid.UUID,
        unit_id: uuid.UUID | None,
        description: str,
        window_start: date,
        window_end: date,
    ) -> VariableExpense | None:
        """First variable expense matching the key dated in ``[window_start, window_end)``."""
        ...

    async def create_variable_expense(
        self,
        *,
        property_id: uuid.UUID,
        unit_id: uuid.UUID | None,
        expense_date: date,
        description: str,
        amount: Decimal,
        category: str | None,
    ) -> VariableExpense: ...


class SqlExpenseStore:
    """:class:`ExpenseStore` backed by an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def savepoint(self) -> AbstractAsyncContextManager[object]:
        # SAVEPOINT: a failed item must not abort the outer transaction.
        return self.session.begin_nested()

    async def list_active_fixed_expenses(self, as_of: date) -> list[FixedExpense]:
        result = await self.session.execute(
            select(FixedExpense)
            .where(or_(FixedExpense.end_date.is_(None), FixedExpense.end_date >= as_of))
            .order_by(FixedExpense.start_date.asc())
        )
        return list(result.scalars().all())

    async def find_generated_expense(
        self,
        property_id: uuid.UUID,
        unit_id: uuid.UUID | None,
        description: str,
        window_start: date,
        window_end: date,
    ) -> VariableExpense | None:
        unit_filter = VariableExpense.unit_id.is_(None) if unit_id is None else VariableExpense.unit_id == unit_id
        result = await self.session.execute(
            select(VariableExpense)
            .where(
                VariableExpense.property_id == property_id,
                unit_filter,
                VariableExpense.description == description,
                VariableExpense.date >= window_start,
                VariableExpense.date < window_end,
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create_variable_expense(
        self,
        *,
        property_id: uuid.UUID,
        unit_id: uuid.UUID | None,
        expense_date: date,
        description: str,
        amount: Decimal,
        category: str | None,
    ) -> VariableExpense:
        expense = VariableExpense(
            property_id=property_id,
            unit_id=unit_id,
            date=expense_date,
            description=description,
            amount=amount,
            category=category,
        )
        self.session.add(expense)
        await self.session.flush()
        return expense
