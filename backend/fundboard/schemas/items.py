"""Item Schemas — Pydantic models for dashboard item requests and responses.

Invariants:
    - ItemCreate mirrors the create form: title, description, category, goal, duration
    - ItemUpdate mirrors the edit forms; per-dashboard required fields are checked
      by to_edit_submission() since the body shape cannot see the URL's dashboard
    - Non-finite metrics (zero goal / zero invested) serialize as null
    - risk/impact are stored in their canonical casing ("high" -> "High");
      blank means unset
"""

from enum import Enum

from pydantic import BaseModel, Field, HttpUrl, field_validator

from fundboard.core.domain_types import DashboardKind, ImpactLevel, RiskLevel
from fundboard.core.errors import ItemValidationError
from fundboard.core.fundable_item import FundableItem
from fundboard.core.item_forms import CreateSubmission, EditSubmission
from fundboard.core.metrics import (
    DonorSummary, InvestorSummary, ItemMetrics,
    donor_item_metrics, investor_item_metrics, is_finite,
)


def finite_or_none(value: float | None) -> float | None:
    if value is None or not is_finite(value):
        return None
    return value


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("cannot be empty or whitespace")
    return v


def _canonical_level(v: str | None, levels: type[Enum]) -> str | None:
    """Canonical level value for any casing; None when blank."""
    if v is None or not v.strip():
        return None
    for level in levels:
        if level.value.lower() == v.strip().lower():
            return level.value
    raise ValueError(f"must be one of: {', '.join(l.value for l in levels)}")


class ItemCreate(BaseModel):
    """Create form submission. duration: days (donor) or months (investor)."""
    title: str = Field(min_length=1, max_length=100)
    description: str = Field("", max_length=500)
    category: str = Field(min_length=1, max_length=100)
    goal: float = Field(ge=0)
    duration: int = Field(0, ge=0)
    impact: str | None = Field(None, max_length=50)
    risk: str | None = Field(None, max_length=50)
    shopify_store: str | None = Field(None, max_length=255)

    @field_validator("title", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("risk")
    @classmethod
    def known_risk(cls, v: str | None) -> str | None:
        return _canonical_level(v, RiskLevel)

    @field_validator("impact")
    @classmethod
    def known_impact(cls, v: str | None) -> str | None:
        return _canonical_level(v, ImpactLevel)

    def to_submission(self) -> CreateSubmission:
        return CreateSubmission(
            title=self.title, description=self.description,
            category=self.category, goal=self.goal, duration=self.duration,
            impact=self.impact, risk=self.risk, shopify_store=self.shopify_store,
        )


class ItemUpdate(BaseModel):
    """Edit form submission for either dashboard."""
    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10, max_length=500)
    category: str = Field(min_length=1, max_length=100)
    # donor
    goal: float | None = Field(None, ge=100)
    # investor
    invested: float | None = Field(None, ge=100)
    current_value: float | None = Field(None, ge=0)
    risk: str | None = Field(None, min_length=1, max_length=50)
    duration: str | None = Field(None, min_length=1, max_length=50)
    shopify_store_url: HttpUrl | None = None

    @field_validator("shopify_store_url", mode="before")
    @classmethod
    def blank_url_is_none(cls, v):
        return None if v == "" else v

    @field_validator("risk")
    @classmethod
    def known_risk(cls, v: str | None) -> str | None:
        return _canonical_level(v, RiskLevel)

    def to_edit_submission(self, kind: DashboardKind) -> EditSubmission:
        if kind is DashboardKind.DONOR and self.goal is None:
            raise ItemValidationError("Goal must be at least 100", "goal")
        if kind is DashboardKind.INVESTOR:
            if self.invested is None:
                raise ItemValidationError(
                    "Investment amount must be at least 100", "invested",
                )
            if not self.risk:
                raise ItemValidationError("Please select a risk level", "risk")
            if not self.duration:
                raise ItemValidationError("Please enter a duration", "duration")
        return EditSubmission(
            title=self.title, description=self.description,
            category=self.category, goal=self.goal,
            invested=self.invested, current_value=self.current_value,
            risk=self.risk, duration=self.duration,
            shopify_store=(
                str(self.shopify_store_url) if self.shopify_store_url else None
            ),
        )


class MetricsResponse(BaseModel):
    progress: float | None
    remaining: float | None
    gain: float | None = None
    gain_percent: float | None = None
    project_progress: float | None = None

    @classmethod
    def from_metrics(cls, m: ItemMetrics) -> "MetricsResponse":
        return cls(
            progress=finite_or_none(m.progress),
            remaining=finite_or_none(m.remaining),
            gain=finite_or_none(m.gain),
            gain_percent=finite_or_none(m.gain_percent),
            project_progress=finite_or_none(m.project_progress),
        )


class ItemResponse(BaseModel):
    """Item plus its card metrics."""
    id: int
    dashboard: DashboardKind
    title: str
    description: str
    category: str
    icon_name: str
    goal: float
    raised: float
    donors: int
    days_left: int
    status: str
    impact: str | None = None
    risk: str | None = None
    duration: str | None = None
    shopify_store: str | None = None
    invested: float | None = None
    current_value: float | None = None
    roi: float | None = None
    project_goal: float | None = None
    total_invested: float | None = None
    metrics: MetricsResponse

    @classmethod
    def from_item(cls, item: FundableItem, kind: DashboardKind) -> "ItemResponse":
        metrics = (
            donor_item_metrics(item) if kind is DashboardKind.DONOR
            else investor_item_metrics(item)
        )
        return cls(
            id=item.id, dashboard=kind, title=item.title,
            description=item.description, category=item.category,
            icon_name=item.icon.value, goal=item.goal, raised=item.raised,
            donors=item.donors, days_left=item.days_left, status=item.status,
            impact=item.impact, risk=item.risk, duration=item.duration,
            shopify_store=item.shopify_store, invested=item.invested,
            current_value=item.current_value, roi=item.roi,
            project_goal=item.project_goal, total_invested=item.total_invested,
            metrics=MetricsResponse.from_metrics(metrics),
        )


class ItemListResponse(BaseModel):
    items: list[ItemResponse]
    filter: str
    count: int


class DonorSummaryResponse(BaseModel):
    total_donated: float
    active_projects: int
    completed_projects: int
    total_donors: int

    @classmethod
    def from_summary(cls, s: DonorSummary) -> "DonorSummaryResponse":
        return cls(
            total_donated=s.total_donated, active_projects=s.active_projects,
            completed_projects=s.completed_projects, total_donors=s.total_donors,
        )


class InvestorSummaryResponse(BaseModel):
    total_invested: float
    total_value: float
    total_gain: float
    total_roi: float
    active_investments: int
    average_roi: float

    @classmethod
    def from_summary(cls, s: InvestorSummary) -> "InvestorSummaryResponse":
        return cls(
            total_invested=s.total_invested, total_value=s.total_value,
            total_gain=s.total_gain, total_roi=s.total_roi,
            active_investments=s.active_investments, average_roi=s.average_roi,
        )
