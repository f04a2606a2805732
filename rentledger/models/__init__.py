"""SQLAlchemy models for RentLedger.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from rentledger.models.booking import Booking
from rentledger.models.contact import Contact, Inquiry
from rentledger.models.expense import FixedExpense, VariableExpense
from rentledger.models.guest import Guest
from rentledger.models.property import Property
from rentledger.models.unit import Unit
from rentledger.models.user import User

__all__ = [
    "Booking",
    "Contact",
    "FixedExpense",
    "Guest",
    "Inquiry",
    "Property",
    "Unit",
    "User",
    "VariableExpense",
]
