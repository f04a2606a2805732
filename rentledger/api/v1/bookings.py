"""Bookings CRUD API router.

Every create and update goes through the booking overlap guard: a unit can
never hold two bookings whose inclusive date ranges touch.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.api.deps import get_db, require_permission
from rentledger.api.v1.units import get_unit_or_404
from rentledger.models.booking import Booking
from rentledger.models.guest import Guest
from rentledger.models.unit import Unit
from rentledger.models.user import User
from rentledger.repositories.bookings import SqlBookingStore
from rentledger.schemas.auth import MessageResponse
from rentledger.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingListResponse,
    BookingUpdate,
)
from rentledger.services.booking_guard import check_overlap

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])

_REQUIRED_FIELDS = frozenset({"unit_id", "guest_id", "start_date", "end_date", "price"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _get_booking_or_404(booking_id: uuid.UUID, db: AsyncSession) -> Booking:
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()

    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking not found",
        )
    return booking


async def _ensure_guest_exists(db: AsyncSession, guest_id: uuid.UUID) -> None:
    result = await db.execute(select(Guest.id).where(Guest.id == guest_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guest not found",
        )


async def _reject_overlap(
    db: AsyncSession,
    unit_id: uuid.UUID,
    start_date: date,
    end_date: date,
    exclude_booking_id: uuid.UUID | None = None,
) -> None:
    """Raise 409 if the unit already has a booking touching the given dates."""
    conflict = await check_overlap(
        SqlBookingStore(db),
        unit_id,
        start_date,
        end_date,
        exclude_booking_id=exclude_booking_id,
    )
    if conflict is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Dates conflict with an existing booking",
        )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=BookingDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("booking", "create")),
) -> Booking:
    """Create a booking.

    Validates that:
    - The unit and the guest exist.
    - The unit has no booking overlapping the requested dates.
    """
    await get_unit_or_404(db, body.unit_id)
    await _ensure_guest_exists(db, body.guest_id)
    await _reject_overlap(db, body.unit_id, body.start_date, body.end_date)

    booking = Booking(**body.model_dump())
    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    logger.info("User %s created booking %s on unit %s", current_user.id, booking.id, booking.unit_id)
    return booking


@router.get(
    "",
    response_model=BookingListResponse,
    summary="List bookings",
)
async def list_bookings(
    property_id: uuid.UUID | None = Query(None, description="Filter by property"),
    unit_id: uuid.UUID | None = Query(None, description="Filter by unit"),
    guest_id: uuid.UUID | None = Query(None, description="Filter by guest"),
    start_date: date | None = Query(None, description="Window start: bookings ending on/after this date"),
    end_date: date | None = Query(None, description="Window end: bookings starting on/before this date"),
    skip: int = Query(0, ge=0, description="Pagination offset"),
    limit: int = Query(100, ge=1, le=500, description="Pagination limit"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("booking", "read")),
) -> dict:
    """Return bookings ordered by start date, optionally restricted to a calendar window."""
    filters = []
    if property_id is not None:
        filters.append(Unit.property_id == property_id)
    if unit_id is not None:
        filters.append(Booking.unit_id == unit_id)
    if guest_id is not None:
        filters.append(Booking.guest_id == guest_id)
    if start_date is not None:
        filters.append(Booking.end_date >= start_date)
    if end_date is not None:
        filters.append(Booking.start_date <= end_date)

    base_query = select(Booking).join(Unit, Booking.unit_id == Unit.id).where(*filters)
    count_query = (
        select(func.count()).select_from(Booking).join(Unit, Booking.unit_id == Unit.id).where(*filters)
    )

    total = (await db.execute(count_query)).scalar_one()
    result = await db.execute(base_query.order_by(Booking.start_date.asc()).offset(skip).limit(limit))
    items = list(result.scalars().all())

    return {"items": items, "total": total}


@router.get(
    "/{booking_id}",
    response_model=BookingDetailResponse,
    summary="Get booking detail with nested unit and guest",
)
async def get_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("booking", "read")),
) -> Booking:
    return await _get_booking_or_404(booking_id, db)


@router.put(
    "/{booking_id}",
    response_model=BookingDetailResponse,
    summary="Update a booking",
)
async def update_booking(
    booking_id: uuid.UUID,
    body: BookingUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("booking", "update")),
) -> Booking:
    """Partially update or reassign a booking.

    Re-runs the overlap guard, excluding this booking, whenever the unit or
    the dates change.
    """
    booking = await _get_booking_or_404(booking_id, db)

    update_data = body.model_dump(exclude_unset=True)

    # Explicit nulls on required fields mean "unchanged".
    new_unit_id = update_data.get("unit_id")
    unit_changed = new_unit_id is not None and new_unit_id != booking.unit_id
    if unit_changed:
        await get_unit_or_404(db, new_unit_id)

    new_guest_id = update_data.get("guest_id")
    if new_guest_id is not None and new_guest_id != booking.guest_id:
        await _ensure_guest_exists(db, new_guest_id)

    effective_unit_id = update_data.get("unit_id") or booking.unit_id
    effective_start = update_data.get("start_date") or booking.start_date
    effective_end = update_data.get("end_date") or booking.end_date

    if effective_end <= effective_start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail="end_date must be after start_date",
        )

    dates_changed = update_data.get("start_date") is not None or update_data.get("end_date") is not None
    if dates_changed or unit_changed:
        await _reject_overlap(
            db,
            effective_unit_id,
            effective_start,
            effective_end,
            exclude_booking_id=booking.id,
        )

    for field, value in update_data.items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(booking, field, value)

    db.add(booking)
    await db.flush()
    await db.refresh(booking)
    return booking


@router.delete(
    "/{booking_id}",
    response_model=MessageResponse,
    summary="Cancel (delete) a booking",
)
async def delete_booking(
    booking_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("booking", "delete")),
) -> MessageResponse:
    booking = await _get_booking_or_404(booking_id, db)

    await db.delete(booking)
    await db.flush()
    logger.info("User %s deleted booking %s", current_user.id, booking_id)
    return MessageResponse(message="Booking deleted")
