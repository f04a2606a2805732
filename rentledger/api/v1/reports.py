"""Reports API router: profit and loss per property."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from rentledger.api.deps import get_db, require_permission
from rentledger.api.v1.properties import get_property_or_404
from rentledger.models.user import User
from rentledger.schemas.report import ProfitAndLossResponse
from rentledger.services.pl_report import build_pl_report

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.get("/pl", response_model=ProfitAndLossResponse)
async def get_profit_and_loss(
    property_id: uuid.UUID = Query(..., description="Property to report on"),
    year: int = Query(..., ge=2000, le=2100),
    month: int | None = Query(None, ge=1, le=12, description="1-12; omit for the whole year"),
    db: AsyncSession = Depends(get_db),
    _user: User = Depends(require_permission("report", "read")),
) -> ProfitAndLossResponse:
    """Revenue, fixed and variable costs, and margin of a property for a month or a year."""
    prop = await get_property_or_404(db, property_id)
    report = await build_pl_report(db, property_id, year, month)

    return ProfitAndLossResponse(
        property_id=prop.id,
        property_name=prop.name,
        period_start=report.period_start,
        period_end=report.period_end,
        revenue=report.revenue,
        fixed_expenses=report.fixed_expenses,
        variable_expenses=report.variable_expenses,
        margin=report.margin,
        margin_percentage=report.margin_percentage,
    )
