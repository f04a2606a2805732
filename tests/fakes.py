"""In-memory stand-ins for the booking and expense stores.

They hold plain model instances (never added to a session) so the overlap
guard and the expense generator can be tested without a database.
"""

import uuid
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal

from rentledger.models.booking import Booking
from rentledger.models.expense import FixedExpense, VariableExpense


def make_booking(unit_id: uuid.UUID, start: date, end: date, **kwargs) -> Booking:
    return Booking(
        id=kwargs.pop("id", uuid.uuid4()),
        unit_id=unit_id,
        guest_id=kwargs.pop("guest_id", uuid.uuid4()),
        start_date=start,
        end_date=end,
        price=kwargs.pop("price", Decimal("100.00")),
        **kwargs,
    )


def make_fixed_expense(
    start: date,
    recurrence: str = "MONTHLY",
    *,
    end: date | None = None,
    amount: Decimal = Decimal("1500.00"),
    description: str = "Rent",
    property_id: uuid.UUID | None = None,
    unit_id: uuid.UUID | None = None,
) -> FixedExpense:
    return FixedExpense(
        id=uuid.uuid4(),
        property_id=property_id or uuid.uuid4(),
        unit_id=unit_id,
        description=description,
        amount=amount,
        recurrence=recurrence,
        start_date=start,
        end_date=end,
    )


class FakeBookingStore:
    """Returns every booking of the unit; the guard does the filtering."""

    def __init__(self, bookings: list[Booking] | None = None) -> None:
        self.bookings = list(bookings or [])

    async def list_unit_bookings(self, unit_id, start_date, end_date, *, exclude_booking_id=None):
        return [b for b in self.bookings if b.unit_id == unit_id]


class FakeExpenseStore:
    """Keeps fixed templates and created variable expenses in lists.

    ``fail_for`` holds fixed-expense descriptions whose creation raises, to
    exercise per-item failure isolation.
    """

    def __init__(self, fixed_expenses: list[FixedExpense] | None = None, fail_for: set[str] | None = None) -> None:
        self.fixed_expenses = list(fixed_expenses or [])
        self.created: list[VariableExpense] = []
        self.fail_for = fail_for or set()

    @asynccontextmanager
    async def savepoint(self):
        yield

    async def list_active_fixed_expenses(self, as_of):
        # Deliberately unfiltered: the generator must re-check end dates itself.
        return list(self.fixed_expenses)

    async def find_generated_expense(self, property_id, unit_id, description, window_start, window_end):
        for expense in self.created:
            if (
                expense.property_id == property_id
                and expense.unit_id == unit_id
                and expense.description == description
                and window_start <= expense.date < window_end
            ):
                return expense
        return None

    async def create_variable_expense(self, *, property_id, unit_id, expense_date, description, amount, category):
        if any(description.endswith(name) for name in self.fail_for):
            raise RuntimeError(f"store unavailable for {description!r}")
        expense = VariableExpense(
            id=uuid.uuid4(),
            property_id=property_id,
            unit_id=unit_id,
            date=expense_date,
            description=description,
            amount=amount,
            category=category,
        )
        self.created.append(expense)
        return expense
