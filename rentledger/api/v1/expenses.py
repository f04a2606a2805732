"""Fixed and variable expense API routes, plus the on-demand generation trigger."""

from __future__ import annotations

import logging
import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.api.deps import get_db, require_permission
from rentledger.api.v1.properties import get_property_or_404
from rentledger.models.expense import FixedExpense, VariableExpense
from rentledger.models.unit import Unit
from rentledger.models.user import User
from rentledger.repositories.expenses import SqlExpenseStore
from rentledger.schemas.auth import MessageResponse
from rentledger.schemas.expense import (
    FixedExpenseCreate,
    FixedExpenseListResponse,
    FixedExpenseResponse,
    FixedExpenseUpdate,
    GenerateExpensesResponse,
    VariableExpenseCreate,
    VariableExpenseListResponse,
    VariableExpenseResponse,
    VariableExpenseUpdate,
)
from rentledger.services.expense_generator import generate_due_expenses

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/expenses", tags=["expenses"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _validate_scope(db: AsyncSession, property_id: uuid.UUID, unit_id: uuid.UUID | None) -> None:
    """Ensure the property exists and, when given, that the unit belongs to it."""
    await get_property_or_404(db, property_id)
    if unit_id is None:
        return
    result = await db.execute(select(Unit.property_id).where(Unit.id == unit_id))
    unit_property_id = result.scalar_one_or_none()
    if unit_property_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Unit not found",
        )
    if unit_property_id != property_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail="Unit does not belong to the property",
        )


async def _get_or_404(db: AsyncSession, model: type, object_id: uuid.UUID, label: str):
    result = await db.execute(select(model).where(model.id == object_id))
    obj = result.scalar_one_or_none()
    if obj is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )
    return obj


# ---------------------------------------------------------------------------
# Fixed expenses
# ---------------------------------------------------------------------------


@router.post(
    "/fixed",
    response_model=FixedExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a recurring expense",
)
async def create_fixed_expense(
    body: FixedExpenseCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("fixed_expense", "create")),
) -> FixedExpense:
    await _validate_scope(db, body.property_id, body.unit_id)

    expense = FixedExpense(**body.model_dump())
    db.add(expense)
    await db.flush()
    await db.refresh(expense)
    return expense


@router.get(
    "/fixed",
    response_model=FixedExpenseListResponse,
    summary="List recurring expenses",
)
async def list_fixed_expenses(
    property_id: uuid.UUID | None = Query(None),
    active_on: date | None = Query(None, description="Only expenses still active on this date"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("fixed_expense", "read")),
) -> dict:
    filters = []
    if property_id is not None:
        filters.append(FixedExpense.property_id == property_id)
    if active_on is not None:
        filters.append((FixedExpense.end_date.is_(None)) | (FixedExpense.end_date >= active_on))

    result = await db.execute(select(FixedExpense).where(*filters).order_by(FixedExpense.start_date))
    items = list(result.scalars().all())
    return {"items": items, "total": len(items)}


@router.get("/fixed/{expense_id}", response_model=FixedExpenseResponse)
async def get_fixed_expense(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("fixed_expense", "read")),
) -> FixedExpense:
    return await _get_or_404(db, FixedExpense, expense_id, "Fixed expense")


@router.put(
    "/fixed/{expense_id}",
    response_model=FixedExpenseResponse,
    summary="End a recurring expense",
)
async def update_fixed_expense(
    expense_id: uuid.UUID,
    body: FixedExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("fixed_expense", "update")),
) -> FixedExpense:
    """Set or clear the end date. The rest of the template is immutable."""
    expense = await _get_or_404(db, FixedExpense, expense_id, "Fixed expense")

    if body.end_date is not None and body.end_date < expense.start_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail="end_date must not be before start_date",
        )
    expense.end_date = body.end_date

    db.add(expense)
    await db.flush()
    await db.refresh(expense)
    return expense


@router.delete("/fixed/{expense_id}", response_model=MessageResponse)
async def delete_fixed_expense(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("fixed_expense", "delete")),
) -> MessageResponse:
    """Delete a template. Expenses it already generated are kept."""
    expense = await _get_or_404(db, FixedExpense, expense_id, "Fixed expense")
    await db.delete(expense)
    await db.flush()
    return MessageResponse(message="Fixed expense deleted")


# ---------------------------------------------------------------------------
# Variable expenses
# ---------------------------------------------------------------------------


@router.post(
    "/variable",
    response_model=VariableExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a one-off expense",
)
async def create_variable_expense(
    body: VariableExpenseCreate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("variable_expense", "create")),
) -> VariableExpense:
    await _validate_scope(db, body.property_id, body.unit_id)

    expense = VariableExpense(**body.model_dump())
    db.add(expense)
    await db.flush()
    await db.refresh(expense)
    return expense


@router.get(
    "/variable",
    response_model=VariableExpenseListResponse,
    summary="List one-off expenses",
)
async def list_variable_expenses(
    property_id: uuid.UUID | None = Query(None),
    unit_id: uuid.UUID | None = Query(None),
    date_from: date | None = Query(None, description="Expenses dated on/after this date"),
    date_to: date | None = Query(None, description="Expenses dated on/before this date"),
    category: str | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("variable_expense", "read")),
) -> dict:
    filters = []
    if property_id is not None:
        filters.append(VariableExpense.property_id == property_id)
    if unit_id is not None:
        filters.append(VariableExpense.unit_id == unit_id)
    if date_from is not None:
        filters.append(VariableExpense.date >= date_from)
    if date_to is not None:
        filters.append(VariableExpense.date <= date_to)
    if category is not None:
        filters.append(VariableExpense.category == category)

    total = (await db.execute(select(func.count()).select_from(VariableExpense).where(*filters))).scalar_one()
    result = await db.execute(
        select(VariableExpense).where(*filters).order_by(VariableExpense.date.desc()).offset(skip).limit(limit)
    )
    return {"items": list(result.scalars().all()), "total": total}


@router.get("/variable/{expense_id}", response_model=VariableExpenseResponse)
async def get_variable_expense(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("variable_expense", "read")),
) -> VariableExpense:
    return await _get_or_404(db, VariableExpense, expense_id, "Variable expense")


@router.put("/variable/{expense_id}", response_model=VariableExpenseResponse)
async def update_variable_expense(
    expense_id: uuid.UUID,
    body: VariableExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("variable_expense", "update")),
) -> VariableExpense:
    expense = await _get_or_404(db, VariableExpense, expense_id, "Variable expense")

    update_data = body.model_dump(exclude_unset=True)
    if update_data.get("unit_id") is not None:
        await _validate_scope(db, expense.property_id, update_data["unit_id"])

    for field, value in update_data.items():
        if value is None and field in ("date", "description", "amount"):
            continue
        setattr(expense, field, value)

    db.add(expense)
    await db.flush()
    await db.refresh(expense)
    return expense


@router.delete("/variable/{expense_id}", response_model=MessageResponse)
async def delete_variable_expense(
    expense_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("variable_expense", "delete")),
) -> MessageResponse:
    expense = await _get_or_404(db, VariableExpense, expense_id, "Variable expense")
    await db.delete(expense)
    await db.flush()
    return MessageResponse(message="Variable expense deleted")


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


@router.post(
    "/generate",
    response_model=GenerateExpensesResponse,
    summary="Generate due recurring expenses",
)
async def generate_expenses(
    as_of: date | None = Query(None, description="Reference date, defaults to today"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_permission("variable_expense", "generate")),
) -> GenerateExpensesResponse:
    """Run the recurring expense generator now (ADMIN only).

    Safe to call repeatedly: expenses already generated this month are skipped.
    """
    reference = as_of or date.today()
    generated = await generate_due_expenses(SqlExpenseStore(db), reference)
    logger.info("User %s generated %d expenses as of %s", current_user.id, generated, reference)
    return GenerateExpensesResponse(as_of=reference, generated=generated)
