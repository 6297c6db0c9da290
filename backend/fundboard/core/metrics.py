"""Derived Metrics — funding progress, returns, and dashboard totals from stored numbers.

Invariants:
    - Pure functions, no IO; inputs are never mutated
    - For goal > 0 and raised >= 0: progress == 100 * raised / goal
    - A zero denominator follows IEEE float semantics (x/0 -> ±inf, 0/0 -> nan)
      instead of raising; callers decide how to present non-finite values
    - Dashboard totals guard what the dashboards guard (total ROI, average ROI)
      and nothing else

Design Decisions:
    - _ratio instead of bare "/": Python raises ZeroDivisionError where the
      dashboards produced Infinity/NaN, and the unguarded gap is kept visible
    - "current_value or invested" fallbacks mirror the falsy-zero behavior of
      the dashboards (a current value of 0 reads as "not set")
"""

import math
from dataclasses import dataclass
from typing import Iterable

from fundboard.core.domain_types import ItemStatus
from fundboard.core.fundable_item import FundableItem


def _ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator with IEEE semantics for a zero denominator."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


# ─── Single-item metrics ─────────────────────────────────────────

def funding_progress(raised: float, goal: float) -> float:
    """Percent of goal raised. Unguarded for goal == 0."""
    return _ratio(raised, goal) * 100


def funding_remaining(raised: float, goal: float) -> float:
    return goal - raised


def investment_gain(invested: float, current_value: float) -> float:
    return current_value - invested


def gain_percent(invested: float, current_value: float) -> float:
    """Gain as percent of the amount invested. Unguarded for invested == 0."""
    return _ratio(investment_gain(invested, current_value), invested) * 100


def recompute_roi(
    invested: float, current_value: float, previous_roi: float | None,
) -> float:
    """ROI after an edit: recomputed when both amounts are positive, else kept."""
    if invested > 0 and current_value > 0:
        return (current_value - invested) / invested * 100
    return previous_roi or 0


def is_finite(value: float) -> bool:
    return not (math.isnan(value) or math.isinf(value))


@dataclass(frozen=True)
class ItemMetrics:
    """Per-card figures shown next to an item."""
    progress: float
    remaining: float
    gain: float | None = None
    gain_percent: float | None = None
    project_progress: float | None = None


def donor_item_metrics(item: FundableItem) -> ItemMetrics:
    return ItemMetrics(
        progress=funding_progress(item.raised, item.goal),
        remaining=funding_remaining(item.raised, item.goal),
    )


def investor_item_metrics(item: FundableItem) -> ItemMetrics:
    """Investment card: invested plays goal, current value plays raised."""
    invested = item.invested or 0
    current = item.current_value or invested
    project_progress = None
    if item.project_goal:
        project_progress = funding_progress(
            item.total_invested or 0, item.project_goal,
        )
    return ItemMetrics(
        progress=funding_progress(current, invested),
        remaining=funding_remaining(current, invested),
        gain=investment_gain(invested, current),
        gain_percent=gain_percent(invested, current),
        project_progress=project_progress,
    )


# ─── Dashboard totals ────────────────────────────────────────────

@dataclass(frozen=True)
class DonorSummary:
    total_donated: float
    active_projects: int
    completed_projects: int
    total_donors: int


@dataclass(frozen=True)
class InvestorSummary:
    total_invested: float
    total_value: float
    total_gain: float
    total_roi: float
    active_investments: int
    average_roi: float


def summarize_donor(items: Iterable[FundableItem]) -> DonorSummary:
    items = list(items)
    return DonorSummary(
        total_donated=sum(i.raised for i in items),
        active_projects=sum(1 for i in items if i.status == ItemStatus.ACTIVE.value),
        completed_projects=sum(
            1 for i in items if i.status == ItemStatus.COMPLETED.value
        ),
        total_donors=sum(i.donors for i in items),
    )


def summarize_investor(items: Iterable[FundableItem]) -> InvestorSummary:
    items = list(items)
    total_invested = sum(i.invested or 0 for i in items)
    total_value = sum(i.current_value or i.invested or 0 for i in items)
    total_gain = total_value - total_invested
    return InvestorSummary(
        total_invested=total_invested,
        total_value=total_value,
        total_gain=total_gain,
        total_roi=total_gain / total_invested * 100 if total_invested > 0 else 0,
        active_investments=sum(
            1 for i in items if i.status == ItemStatus.ACTIVE.value
        ),
        average_roi=(
            sum(i.roi or 0 for i in items) / len(items) if items else 0
        ),
    )


# ─── ROI projection calculator ───────────────────────────────────

@dataclass(frozen=True)
class ROIProjection:
    monthly_return: float
    total_return: float
    final_amount: float


def project_returns(
    investment: float, annual_rate: float, months: float,
) -> ROIProjection:
    """Simple-interest projection: annual rate (percent) spread evenly per month."""
    yearly_return = investment * annual_rate / 100
    monthly_return = yearly_return / 12
    total_return = monthly_return * months
    return ROIProjection(
        monthly_return=round(monthly_return, 2),
        total_return=round(total_return, 2),
        final_amount=round(investment + total_return, 2),
    )
