"""Units CRUD API routes. Units are managed by administrators only."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.api.deps import get_db, require_permission
from rentledger.api.v1.properties import get_property_or_404
from rentledger.models.unit import Unit
from rentledger.models.user import User
from rentledger.schemas.auth import MessageResponse
from rentledger.schemas.property import UnitCreate, UnitListResponse, UnitResponse, UnitUpdate

router = APIRouter(prefix="/api/v1/units", tags=["units"])


async def get_unit_or_404(db: AsyncSession, unit_id: uuid.UUID) -> Unit:
    """Fetch a unit or raise ``HTTPException 404``."""
    result = await db.execute(select(Unit).where(Unit.id == unit_id))
    unit = result.scalar_one_or_none()

    if unit is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unit not found",
        )
    return unit


@router.post(
    "",
    response_model=UnitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a unit to a property",
)
async def create_unit(
    body: UnitCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("unit", "create")),
) -> Unit:
    """Create a unit. Returns 404 if the property does not exist."""
    prop = await get_property_or_404(db, body.property_id)

    unit = Unit(**body.model_dump())
    unit.property = prop  # keeps prop.units in sync within this session
    db.add(unit)
    await db.flush()
    await db.refresh(unit)
    return unit


@router.get(
    "",
    response_model=UnitListResponse,
    summary="List units",
)
async def list_units(
    property_id: uuid.UUID | None = Query(None, description="Filter by property"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("unit", "read")),
) -> dict:
    filters = []
    if property_id is not None:
        filters.append(Unit.property_id == property_id)

    total = (await db.execute(select(func.count()).select_from(Unit).where(*filters))).scalar_one()
    result = await db.execute(select(Unit).where(*filters).order_by(Unit.name).offset(skip).limit(limit))
    return {"items": list(result.scalars().all()), "total": total}


@router.get(
    "/{unit_id}",
    response_model=UnitResponse,
    summary="Get a unit by ID",
)
async def get_unit(
    unit_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("unit", "read")),
) -> Unit:
    return await get_unit_or_404(db, unit_id)


@router.put(
    "/{unit_id}",
    response_model=UnitResponse,
    summary="Update a unit",
)
async def update_unit(
    unit_id: uuid.UUID,
    body: UnitUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("unit", "update")),
) -> Unit:
    """Partially update a unit. Omitted or null fields are left unchanged."""
    unit = await get_unit_or_404(db, unit_id)

    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(unit, field, value)

    db.add(unit)
    await db.flush()
    await db.refresh(unit)
    return unit


@router.delete(
    "/{unit_id}",
    response_model=MessageResponse,
    summary="Delete a unit",
)
async def delete_unit(
    unit_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("unit", "delete")),
) -> MessageResponse:
    """Delete a unit and, through the database cascade, its bookings."""
    unit = await get_unit_or_404(db, unit_id)

    await db.delete(unit)
    await db.flush()
    return MessageResponse(message="Unit deleted")
