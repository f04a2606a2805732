"""Pydantic v2 request/response schemas for booking endpoints."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rentledger.schemas.guest import GuestResponse
from rentledger.schemas.property import UnitResponse

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(BaseModel):
    """Schema for creating a new booking."""

    unit_id: uuid.UUID
    guest_id: uuid.UUID
    start_date: date
    end_date: date
    price: Decimal = Field(..., ge=0)
    source: str | None = Field(None, max_length=100)
    notes: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "BookingCreate":
        """Validate that end_date is strictly after start_date."""
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class BookingUpdate(BaseModel):
    """Schema for partially updating or reassigning a booking. All fields optional."""

    unit_id: uuid.UUID | None = None
    guest_id: uuid.UUID | None = None
    start_date: date | None = None
    end_date: date | None = None
    price: Decimal | None = Field(None, ge=0)
    source: str | None = Field(None, max_length=100)
    notes: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "BookingUpdate":
        """If both dates are provided, validate end_date > start_date."""
        if self.start_date is not None and self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingResponse(BaseModel):
    """Standard booking response returned from CRUD operations."""

    id: uuid.UUID
    unit_id: uuid.UUID
    guest_id: uuid.UUID
    start_date: date
    end_date: date
    price: Decimal
    source: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BookingResponse):
    """Booking with nested unit and guest, as shown on the booking calendar."""

    unit: UnitResponse | None = None
    guest: GuestResponse | None = None


class BookingListResponse(BaseModel):
    """List of bookings ordered by start date."""

    items: list[BookingDetailResponse]
    total: int
