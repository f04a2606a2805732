"""Store protocols and their SQLAlchemy implementations."""

from rentledger.repositories.bookings import BookingStore, SqlBookingStore
from rentledger.repositories.expenses import ExpenseStore, SqlExpenseStore

__all__ = [
    "BookingStore",
    "ExpenseStore",
    "SqlBookingStore",
    "SqlExpenseStore",
]
