"""Guests CRUD API router. Guest emails are unique."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.api.deps import get_db, require_permission
from rentledger.models.guest import Guest
from rentledger.models.user import User
from rentledger.schemas.auth import MessageResponse
from rentledger.schemas.guest import (
    GuestCreate,
    GuestListResponse,
    GuestResponse,
    GuestUpdate,
)

router = APIRouter(prefix="/api/v1/guests", tags=["guests"])

_REQUIRED_FIELDS = frozenset({"first_name", "last_name", "email"})


async def _get_guest_or_404(db: AsyncSession, guest_id: uuid.UUID) -> Guest:
    result = await db.execute(select(Guest).where(Guest.id == guest_id))
    guest = result.scalar_one_or_none()

    if guest is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guest not found",
        )
    return guest


async def _ensure_email_free(db: AsyncSession, email: str, exclude_id: uuid.UUID | None = None) -> None:
    query = select(Guest.id).where(func.lower(Guest.email) == email.lower())
    if exclude_id is not None:
        query = query.where(Guest.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Guest with this email already exists",
        )


@router.post(
    "",
    response_model=GuestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new guest",
)
async def create_guest(
    body: GuestCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("guest", "create")),
) -> Guest:
    """Create a guest. Raises 409 if a guest with the same email exists."""
    await _ensure_email_free(db, body.email)

    guest = Guest(**body.model_dump())
    db.add(guest)
    await db.flush()
    await db.refresh(guest)
    return guest


@router.get(
    "",
    response_model=GuestListResponse,
    summary="List guests with optional search",
)
async def list_guests(
    search: str | None = Query(None, description="Search by name or email (case-insensitive)"),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(20, ge=1, le=100, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("guest", "read")),
) -> dict:
    """Return a paginated list of guests ordered by last name."""
    filters = []
    if search:
        search_pattern = f"%{search}%"
        filters.append(
            or_(
                Guest.first_name.ilike(search_pattern),
                Guest.last_name.ilike(search_pattern),
                Guest.email.ilike(search_pattern),
            )
        )

    total = (await db.execute(select(func.count()).select_from(Guest).where(*filters))).scalar_one()

    items_query = (
        select(Guest).where(*filters).order_by(Guest.last_name, Guest.first_name).offset(skip).limit(limit)
    )
    result = await db.execute(items_query)
    return {"items": list(result.scalars().all()), "total": total}


@router.get(
    "/{guest_id}",
    response_model=GuestResponse,
    summary="Get a guest by ID",
)
async def get_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("guest", "read")),
) -> Guest:
    return await _get_guest_or_404(db, guest_id)


@router.put(
    "/{guest_id}",
    response_model=GuestResponse,
    summary="Update a guest",
)
async def update_guest(
    guest_id: uuid.UUID,
    body: GuestUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("guest", "update")),
) -> Guest:
    """Partially update a guest. A changed email must still be unique."""
    guest = await _get_guest_or_404(db, guest_id)

    update_data = body.model_dump(exclude_unset=True)
    if update_data.get("email") and update_data["email"] != guest.email:
        await _ensure_email_free(db, update_data["email"], exclude_id=guest_id)

    for field, value in update_data.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(guest, field, value)

    db.add(guest)
    await db.flush()
    await db.refresh(guest)
    return guest


@router.delete(
    "/{guest_id}",
    response_model=MessageResponse,
    summary="Delete a guest",
)
async def delete_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("guest", "delete")),
) -> dict:
    """Delete a guest. Their bookings are removed by the database cascade."""
    guest = await _get_guest_or_404(db, guest_id)

    await db.delete(guest)
    await db.flush()
    return {"message": "Guest deleted"}
