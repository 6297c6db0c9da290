"""Metrics Calculators — stateless progress and ROI projection endpoints."""

from fastapi import APIRouter, Query

from fundboard.core.metrics import (
    funding_progress, funding_remaining, project_returns,
)
from fundboard.schemas.items import finite_or_none

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])


@router.get("/progress")
async def progress(
    raised: float = Query(..., ge=0),
    goal: float = Query(...),
):
    """progress = 100 * raised / goal; null when goal is 0."""
    return {
        "progress": finite_or_none(funding_progress(raised, goal)),
        "remaining": funding_remaining(raised, goal),
    }


@router.get("/roi")
async def roi_projection(
    investment: float = Query(0, ge=0),
    rate: float = Query(15),
    months: float = Query(12, ge=0),
):
    """ROI calculator: annual rate (percent) over a timeline in months."""
    result = project_returns(investment, rate, months)
    return {
        "monthly_return": result.monthly_return,
        "total_return": result.total_return,
        "final_amount": result.final_amount,
    }
