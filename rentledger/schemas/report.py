"""Pydantic v2 schemas for reporting endpoints."""

import uuid
from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class ProfitAndLossResponse(BaseModel):
    """Profit and loss of one property over a month or a whole year."""

    property_id: uuid.UUID
    property_name: str
    period_start: date
    period_end: date  # exclusive
    revenue: Decimal
    fixed_expenses: Decimal
    variable_expenses: Decimal
    margin: Decimal
    margin_percentage: Decimal  # 0.00 when there is no revenue
