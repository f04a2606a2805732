"""Pydantic v2 request/response schemas for property and unit endpoints."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

UNIT_TYPE_PATTERN = "^(ROOM|APARTMENT)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PropertyCreate(BaseModel):
    """Schema for creating a new property."""

    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)
    notes: str | None = None


class PropertyUpdate(BaseModel):
    """Schema for partially updating a property. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, max_length=500)
    notes: str | None = None


class UnitCreate(BaseModel):
    """Schema for adding a unit to a property."""

    property_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    unit_type: str = Field("ROOM", pattern=UNIT_TYPE_PATTERN)
    beds: int = Field(1, ge=0)
    baths: int = Field(1, ge=0)
    surface: int | None = Field(None, ge=0)
    base_price: Decimal | None = Field(None, ge=0)
    notes: str | None = None


class UnitUpdate(BaseModel):
    """Schema for partially updating a unit. A unit cannot move between properties."""

    name: str | None = Field(None, min_length=1, max_length=255)
    unit_type: str | None = Field(None, pattern=UNIT_TYPE_PATTERN)
    beds: int | None = Field(None, ge=0)
    baths: int | None = Field(None, ge=0)
    surface: int | None = Field(None, ge=0)
    base_price: Decimal | None = Field(None, ge=0)
    notes: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class UnitResponse(BaseModel):
    """Unit as returned by the API."""

    id: uuid.UUID
    property_id: uuid.UUID
    name: str
    unit_type: str
    beds: int
    baths: int
    surface: int | None = None
    base_price: Decimal | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyResponse(BaseModel):
    """Property information returned from the API."""

    id: uuid.UUID
    name: str
    address: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyDetailResponse(PropertyResponse):
    """Property with its units, for the property manager view."""

    units: list[UnitResponse] = []


class PropertyListResponse(BaseModel):
    """Paginated list of properties."""

    items: list[PropertyDetailResponse]
    total: int


class UnitListResponse(BaseModel):
    """Paginated list of units."""

    items: list[UnitResponse]
    total: int
