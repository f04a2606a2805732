"""Properties CRUD API routes. Mutations are reserved to administrators."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.api.deps import get_db, require_permission
from rentledger.models.property import Property
from rentledger.models.user import User
from rentledger.schemas.auth import MessageResponse
from rentledger.schemas.property import (
    PropertyCreate,
    PropertyDetailResponse,
    PropertyListResponse,
    PropertyResponse,
    PropertyUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


async def get_property_or_404(db: AsyncSession, property_id: uuid.UUID) -> Property:
    """Fetch a property or raise ``HTTPException 404``."""
    result = await db.execute(select(Property).where(Property.id == property_id))
    prop = result.scalar_one_or_none()

    if prop is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Property not found",
        )
    return prop


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new property",
)
async def create_property(
    body: PropertyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("property", "create")),
) -> PropertyResponse:
    """Create a property (ADMIN only)."""
    prop = Property(**body.model_dump())
    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    logger.info("User %s created property %s", current_user.id, prop.id)
    return PropertyResponse.model_validate(prop)


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="List properties with their units",
)
async def list_properties(
    search: str | None = Query(None, description="Filter by name (case-insensitive)"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("property", "read")),
) -> PropertyListResponse:
    """Return paginated properties, each with its units."""
    filters = []
    if search:
        filters.append(Property.name.ilike(f"%{search}%"))

    count_query = select(func.count()).select_from(Property).where(*filters)
    total = (await db.execute(count_query)).scalar_one()

    items_query = select(Property).where(*filters).order_by(Property.name).offset(skip).limit(limit)
    result = await db.execute(items_query)
    items = list(result.scalars().all())

    return PropertyListResponse(
        items=[PropertyDetailResponse.model_validate(p) for p in items],
        total=total,
    )


@router.get(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    summary="Get a property by ID",
)
async def get_property(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("property", "read")),
) -> PropertyDetailResponse:
    """Retrieve a single property with its units. Returns 404 if not found."""
    prop = await get_property_or_404(db, property_id)
    return PropertyDetailResponse.model_validate(prop)


@router.put(
    "/{property_id}",
    response_model=PropertyResponse,
    summary="Update a property",
)
async def update_property(
    property_id: uuid.UUID,
    body: PropertyUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("property", "update")),
) -> PropertyResponse:
    """Partially update a property. Omitted or null fields are left unchanged."""
    prop = await get_property_or_404(db, property_id)

    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(prop, field, value)

    db.add(prop)
    await db.flush()
    await db.refresh(prop)
    return PropertyResponse.model_validate(prop)


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    summary="Delete a property",
)
async def delete_property(
    property_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("property", "delete")),
) -> MessageResponse:
    """Delete a property along with its units, bookings, and expenses."""
    prop = await get_property_or_404(db, property_id)

    await db.delete(prop)
    await db.flush()
    logger.info("User %s deleted property %s", current_user.id, property_id)
    return MessageResponse(message="Property deleted")
