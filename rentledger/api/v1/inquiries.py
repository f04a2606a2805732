"""Contacts and inquiries API router. Inquiries back the kanban board."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.api.deps import get_db, require_permission
from rentledger.models.contact import Contact, Inquiry
from rentledger.models.user import User
from rentledger.schemas.auth import MessageResponse
from rentledger.schemas.contact import (
    ContactCreate,
    ContactListResponse,
    ContactResponse,
    ContactUpdate,
    InquiryCreate,
    InquiryListResponse,
    InquiryResponse,
    InquiryStatusUpdate,
    InquiryUpdate,
)

contacts_router = APIRouter(prefix="/api/v1/contacts", tags=["contacts"])
inquiries_router = APIRouter(prefix="/api/v1/inquiries", tags=["inquiries"])


async def _get_contact_or_404(db: AsyncSession, contact_id: uuid.UUID) -> Contact:
    result = await db.execute(select(Contact).where(Contact.id == contact_id))
    contact = result.scalar_one_or_none()
    if contact is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Contact not found",
        )
    return contact


async def _get_inquiry_or_404(db: AsyncSession, inquiry_id: uuid.UUID) -> Inquiry:
    result = await db.execute(select(Inquiry).where(Inquiry.id == inquiry_id))
    inquiry = result.scalar_one_or_none()
    if inquiry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Inquiry not found",
        )
    return inquiry


# ---------------------------------------------------------------------------
# Contacts
# ---------------------------------------------------------------------------


@contacts_router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(
    body: ContactCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("contact", "create")),
) -> Contact:
    contact = Contact(**body.model_dump())
    db.add(contact)
    await db.flush()
    await db.refresh(contact)
    return contact


@contacts_router.get("", response_model=ContactListResponse)
async def list_contacts(
    search: str | None = Query(None, description="Search by name, email, or company"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("contact", "read")),
) -> dict:
    filters = []
    if search:
        pattern = f"%{search}%"
        filters.append(
            or_(
                Contact.first_name.ilike(pattern),
                Contact.last_name.ilike(pattern),
                Contact.email.ilike(pattern),
                Contact.company.ilike(pattern),
            )
        )

    total = (await db.execute(select(func.count()).select_from(Contact).where(*filters))).scalar_one()
    result = await db.execute(
        select(Contact).where(*filters).order_by(Contact.last_name, Contact.first_name).offset(skip).limit(limit)
    )
    return {"items": list(result.scalars().all()), "total": total}


@contacts_router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("contact", "read")),
) -> Contact:
    return await _get_contact_or_404(db, contact_id)


@contacts_router.put("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: uuid.UUID,
    body: ContactUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("contact", "update")),
) -> Contact:
    contact = await _get_contact_or_404(db, contact_id)

    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in ("first_name", "last_name"):
            continue
        setattr(contact, field, value)

    db.add(contact)
    await db.flush()
    await db.refresh(contact)
    return contact


@contacts_router.delete("/{contact_id}", response_model=MessageResponse)
async def delete_contact(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("contact", "delete")),
) -> MessageResponse:
    """Delete a contact together with its inquiries."""
    contact = await _get_contact_or_404(db, contact_id)
    await db.delete(contact)
    await db.flush()
    return MessageResponse(message="Contact deleted")


# ---------------------------------------------------------------------------
# Inquiries
# ---------------------------------------------------------------------------


@inquiries_router.post("", response_model=InquiryResponse, status_code=status.HTTP_201_CREATED)
async def create_inquiry(
    body: InquiryCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("inquiry", "create")),
) -> Inquiry:
    await _get_contact_or_404(db, body.contact_id)

    inquiry = Inquiry(**body.model_dump())
    db.add(inquiry)
    await db.flush()
    await db.refresh(inquiry)
    return inquiry


@inquiries_router.get("", response_model=InquiryListResponse)
async def list_inquiries(
    status_filter: str | None = Query(
        None, alias="status", pattern="^(NEW|IN_PROGRESS|CLOSED)$", description="Filter by kanban column"
    ),
    contact_id: uuid.UUID | None = Query(None),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("inquiry", "read")),
) -> dict:
    """Return inquiries newest first, with their contact."""
    filters = []
    if status_filter is not None:
        filters.append(Inquiry.status == status_filter)
    if contact_id is not None:
        filters.append(Inquiry.contact_id == contact_id)

    result = await db.execute(select(Inquiry).where(*filters).order_by(Inquiry.created_at.desc()))
    items = list(result.scalars().all())
    return {"items": items, "total": len(items)}


@inquiries_router.get("/{inquiry_id}", response_model=InquiryResponse)
async def get_inquiry(
    inquiry_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("inquiry", "read")),
) -> Inquiry:
    return await _get_inquiry_or_404(db, inquiry_id)


@inquiries_router.put("/{inquiry_id}", response_model=InquiryResponse)
async def update_inquiry(
    inquiry_id: uuid.UUID,
    body: InquiryUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("inquiry", "update")),
) -> Inquiry:
    inquiry = await _get_inquiry_or_404(db, inquiry_id)

    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(inquiry, field, value)

    db.add(inquiry)
    await db.flush()
    await db.refresh(inquiry)
    return inquiry


@inquiries_router.patch("/{inquiry_id}/status", response_model=InquiryResponse)
async def move_inquiry(
    inquiry_id: uuid.UUID,
    body: InquiryStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("inquiry", "update")),
) -> Inquiry:
    """Move an inquiry to another kanban column."""
    inquiry = await _get_inquiry_or_404(db, inquiry_id)
    if inquiry.status != body.status:
        inquiry.status = body.status
        db.add(inquiry)
        await db.flush()
        await db.refresh(inquiry)
    return inquiry


@inquiries_router.delete("/{inquiry_id}", response_model=MessageResponse)
async def delete_inquiry(
    inquiry_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("inquiry", "delete")),
) -> MessageResponse:
    inquiry = await _get_inquiry_or_404(db, inquiry_id)
    await db.delete(inquiry)
    await db.flush()
    return MessageResponse(message="Inquiry deleted")
