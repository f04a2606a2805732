"""Pydantic v2 request/response schemas for fixed and variable expense endpoints."""

import datetime as dt
import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

RECURRENCE_PATTERN = "^(MONTHLY|ANNUAL)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class FixedExpenseCreate(BaseModel):
    """Schema for registering a recurring cost."""

    property_id: uuid.UUID
    unit_id: uuid.UUID | None = None
    description: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., ge=0)
    recurrence: str = Field(..., pattern=RECURRENCE_PATTERN)
    start_date: dt.date
    end_date: dt.date | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "FixedExpenseCreate":
        """An end date, when given, cannot precede the start date."""
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class FixedExpenseUpdate(BaseModel):
    """Fixed expenses are templates: only their end date can change (to stop them)."""

    end_date: dt.date | None = None


class VariableExpenseCreate(BaseModel):
    """Schema for entering a one-off cost."""

    property_id: uuid.UUID
    unit_id: uuid.UUID | None = None
    date: dt.date
    description: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., ge=0)
    category: str | None = Field(None, max_length=100)


class VariableExpenseUpdate(BaseModel):
    """Schema for partially updating a variable expense. All fields optional."""

    unit_id: uuid.UUID | None = None
    date: dt.date | None = None
    description: str | None = Field(None, min_length=1, max_length=255)
    amount: Decimal | None = Field(None, ge=0)
    category: str | None = Field(None, max_length=100)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class FixedExpenseResponse(BaseModel):
    id: uuid.UUID
    property_id: uuid.UUID
    unit_id: uuid.UUID | None = None
    description: str
    amount: Decimal
    recurrence: str
    start_date: dt.date
    end_date: dt.date | None = None
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class VariableExpenseResponse(BaseModel):
    id: uuid.UUID
    property_id: uuid.UUID
    unit_id: uuid.UUID | None = None
    date: dt.date
    description: str
    amount: Decimal
    category: str | None = None
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class FixedExpenseListResponse(BaseModel):
    items: list[FixedExpenseResponse]
    total: int


class VariableExpenseListResponse(BaseModel):
    items: list[VariableExpenseResponse]
    total: int


class GenerateExpensesResponse(BaseModel):
    """Outcome of a recurring expense generation run."""

    as_of: dt.date
    generated: int
