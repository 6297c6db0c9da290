"""Derived Metrics — progress, gain, dashboard totals, ROI projection.

Invariants:
    - progress == 100 * raised / goal for goal > 0, raised >= 0
    - goal == 0 gives a non-finite progress instead of raising
    - Total ROI and average ROI are guarded against empty/zero inputs
"""

import math

import pytest

from fundboard.core.fundable_item import FundableItem
from fundboard.core.metrics import (
    donor_item_metrics, funding_progress, funding_remaining, gain_percent,
    investment_gain, investor_item_metrics, is_finite, project_returns,
    recompute_roi, summarize_donor, summarize_investor,
)
from fundboard.core.seed_data import donor_defaults, investor_defaults


@pytest.mark.parametrize("raised,goal", [
    (0, 100), (37500, 50000), (68000, 75000), (150, 100), (1, 3),
])
def test_progress_is_percent_of_goal(raised, goal):
    assert funding_progress(raised, goal) == pytest.approx(100 * raised / goal)


def test_remaining_is_goal_minus_raised():
    assert funding_remaining(37500, 50000) == 12500
    assert funding_remaining(120, 100) == -20


def test_zero_goal_with_raised_is_infinite():
    assert math.isinf(funding_progress(10, 0))
    assert funding_progress(10, 0) > 0


def test_zero_goal_and_zero_raised_is_nan():
    assert math.isnan(funding_progress(0, 0))


def test_gain_and_gain_percent():
    assert investment_gain(50000, 62500) == 12500
    assert gain_percent(50000, 62500) == pytest.approx(25.0)
    assert gain_percent(100, 80) == pytest.approx(-20.0)


def test_gain_percent_with_zero_invested_is_not_finite():
    assert not is_finite(gain_percent(0, 50))
    assert not is_finite(gain_percent(0, 0))


def test_recompute_roi_needs_both_amounts_positive():
    assert recompute_roi(1000, 1250, 3) == pytest.approx(25.0)
    assert recompute_roi(1000, 0, 7) == 7
    assert recompute_roi(0, 500, None) == 0


def test_donor_item_metrics_from_seed():
    education = donor_defaults()[0]
    m = donor_item_metrics(education)
    assert m.progress == pytest.approx(75.0)
    assert m.remaining == 12500
    assert m.gain is None


def test_investor_item_metrics_uses_invested_as_goal():
    alpha = investor_defaults()[0]
    m = investor_item_metrics(alpha)
    assert m.progress == pytest.approx(125.0)
    assert m.gain == 12500
    assert m.gain_percent == pytest.approx(25.0)
    assert m.project_progress == pytest.approx(75.0)


def test_investor_item_without_current_value_falls_back_to_invested():
    item = FundableItem(id=1, title="x", invested=1000, current_value=None)
    m = investor_item_metrics(item)
    assert m.progress == pytest.approx(100.0)
    assert m.gain == 0
    assert m.project_progress is None


def test_donor_summary_over_seed():
    s = summarize_donor(donor_defaults())
    assert s.total_donated == 37500 + 68000 + 25000
    assert s.active_projects == 2
    assert s.completed_projects == 0
    assert s.total_donors == 234 + 189 + 156


def test_investor_summary_over_seed():
    s = summarize_investor(investor_defaults())
    assert s.total_invested == 225000
    assert s.total_value == 62500 + 88500 + 115000
    assert s.total_gain == 41000
    assert s.total_roi == pytest.approx(41000 / 225000 * 100)
    assert s.active_investments == 3
    assert s.average_roi == pytest.approx((25 + 18 + 15) / 3)


def test_investor_summary_of_empty_list_is_zero():
    s = summarize_investor([])
    assert s.total_invested == 0
    assert s.total_roi == 0
    assert s.average_roi == 0


def test_roi_projection_matches_calculator_defaults():
    p = project_returns(10000, 15, 12)
    assert p.monthly_return == 125.0
    assert p.total_return == 1500.0
    assert p.final_amount == 11500.0


def test_roi_projection_rounds_to_cents():
    p = project_returns(1000, 10, 1)
    assert p.monthly_return == 8.33
    assert p.final_amount == 1008.33
