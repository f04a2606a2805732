"""Pydantic v2 request/response schemas for contacts and inquiries."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

INQUIRY_STATUS_PATTERN = "^(NEW|IN_PROGRESS|CLOSED)$"

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ContactCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    tags: list[str] = []
    notes: str | None = None


class ContactUpdate(BaseModel):
    first_name: str | None = Field(None, min_length=1, max_length=255)
    last_name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=255)
    tags: list[str] | None = None
    notes: str | None = None


class InquiryCreate(BaseModel):
    contact_id: uuid.UUID
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    status: str = Field("NEW", pattern=INQUIRY_STATUS_PATTERN)


class InquiryUpdate(BaseModel):
    subject: str | None = Field(None, min_length=1, max_length=255)
    message: str | None = Field(None, min_length=1)
    status: str | None = Field(None, pattern=INQUIRY_STATUS_PATTERN)


class InquiryStatusUpdate(BaseModel):
    """Move an inquiry to another column of the kanban board."""

    status: str = Field(..., pattern=INQUIRY_STATUS_PATTERN)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ContactResponse(BaseModel):
    id: uuid.UUID
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    tags: list[str] | None = None
    notes: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InquiryResponse(BaseModel):
    id: uuid.UUID
    contact_id: uuid.UUID
    subject: str
    message: str
    status: str
    created_at: datetime
    updated_at: datetime
    contact: ContactResponse | None = None

    model_config = ConfigDict(from_attributes=True)


class ContactListResponse(BaseModel):
    items: list[ContactResponse]
    total: int


class InquiryListResponse(BaseModel):
    items: list[InquiryResponse]
    total: int
