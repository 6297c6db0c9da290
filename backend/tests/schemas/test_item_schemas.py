"""Item schemas — form validation, per-dashboard edit rules, non-finite metrics.

Invariants:
    - Edit forms need goal (donor) or invested/risk/duration (investor)
    - A blank store URL is treated as absent
    - Non-finite metrics serialize as null
"""

import pytest
from pydantic import ValidationError

from fundboard.core.domain_types import DashboardKind
from fundboard.core.errors import ItemValidationError
from fundboard.core.fundable_item import FundableItem
from fundboard.schemas.items import ItemCreate, ItemResponse, ItemUpdate


def _update(**overrides) -> ItemUpdate:
    fields = {
        "title": "Education Fund", "description": "Laptops for students",
        "category": "Education",
    }
    fields.update(overrides)
    return ItemUpdate(**fields)


# --- ItemCreate ---------------------------------------------------------------

def test_create_strips_title():
    body = ItemCreate(title="  Wells  ", category="health", goal=10)
    assert body.title == "Wells"
    assert body.to_submission().duration == 0


def test_create_rejects_negative_goal():
    with pytest.raises(ValidationError):
        ItemCreate(title="Wells", category="health", goal=-1)


def test_create_levels_take_canonical_casing():
    body = ItemCreate(
        title="Wells", category="health", goal=10, impact="critical", risk="LOW",
    )
    assert body.impact == "Critical"
    assert body.risk == "Low"


def test_create_blank_levels_are_unset():
    body = ItemCreate(title="Wells", category="health", goal=10, impact="", risk=" ")
    assert body.impact is None
    assert body.risk is None


@pytest.mark.parametrize("field,value", [("impact", "huge"), ("risk", "extreme")])
def test_create_rejects_unknown_levels(field, value):
    with pytest.raises(ValidationError):
        ItemCreate(title="Wells", category="health", goal=10, **{field: value})


# --- ItemUpdate ---------------------------------------------------------------

def test_update_title_needs_three_chars():
    with pytest.raises(ValidationError):
        _update(title="ab", goal=100)


def test_update_description_needs_ten_chars():
    with pytest.raises(ValidationError):
        _update(description="short", goal=100)


def test_update_goal_minimum():
    with pytest.raises(ValidationError):
        _update(goal=99)


def test_blank_store_url_is_none():
    submission = _update(goal=100, shopify_store_url="").to_edit_submission(
        DashboardKind.DONOR,
    )
    assert submission.shopify_store is None


def test_valid_store_url_is_kept():
    submission = _update(
        goal=100, shopify_store_url="https://demo.myshopify.com",
    ).to_edit_submission(DashboardKind.DONOR)
    assert submission.shopify_store.startswith("https://demo.myshopify.com")


def test_update_rejects_unknown_risk():
    with pytest.raises(ValidationError):
        _update(invested=1000, risk="Sky-high", duration="12 months")


def test_donor_edit_requires_goal():
    with pytest.raises(ItemValidationError) as exc_info:
        _update().to_edit_submission(DashboardKind.DONOR)
    assert exc_info.value.field == "goal"


@pytest.mark.parametrize("missing", ["invested", "risk", "duration"])
def test_investor_edit_requires_fields(missing):
    fields = {"invested": 1000, "risk": "Low", "duration": "12 months"}
    fields.pop(missing)
    with pytest.raises(ItemValidationError) as exc_info:
        _update(**fields).to_edit_submission(DashboardKind.INVESTOR)
    assert exc_info.value.field == missing


# --- ItemResponse -------------------------------------------------------------

def test_zero_goal_metrics_are_null():
    item = FundableItem(id=1, title="t", goal=0, raised=5)
    response = ItemResponse.from_item(item, DashboardKind.DONOR)
    assert response.metrics.progress is None
    assert response.metrics.remaining == -5


def test_zero_invested_gain_percent_is_null():
    item = FundableItem(id=1, title="t", invested=0, current_value=0)
    response = ItemResponse.from_item(item, DashboardKind.INVESTOR)
    assert response.metrics.gain_percent is None
    assert response.metrics.gain == 0
