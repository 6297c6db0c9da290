"""Item Forms — turn create/edit submissions into items, and filter item lists.

Invariants:
    - New items start with raised 0, donors 0, status "active"
    - New investor items start with invested == current_value == goal and roi 0
    - New ids are unique within the list they join
    - Edits only touch the fields their dashboard's edit form carries;
      everything else (icon, donors, status, ...) is preserved
    - Pure functions: the store persists the result

Design Decisions:
    - Ids are millisecond timestamps, bumped past collisions within the list
    - Submissions arrive already validated (pydantic schemas at the API boundary)
"""

import time
from dataclasses import dataclass

from fundboard.core.domain_types import (
    DashboardKind, ItemFilter, ItemId, ItemStatus, TOP_PERFORMER_ROI,
)
from fundboard.core.fundable_item import FundableItem
from fundboard.core.icons import icon_for_category
from fundboard.core.metrics import recompute_roi


@dataclass(frozen=True)
class CreateSubmission:
    """Fields of the create form. duration is days (donor) or months (investor)."""
    title: str
    description: str
    category: str
    goal: float
    duration: int
    impact: str | None = None
    risk: str | None = None
    shopify_store: str | None = None


@dataclass(frozen=True)
class EditSubmission:
    """Fields of the edit form. Donor edits use goal; investor edits use
    invested/current_value/risk/duration."""
    title: str
    description: str
    category: str
    goal: float | None = None
    invested: float | None = None
    current_value: float | None = None
    risk: str | None = None
    duration: str | None = None
    shopify_store: str | None = None


def next_item_id(existing: list[FundableItem], now_ms: int | None = None) -> ItemId:
    """Timestamp id, unique within the given list."""
    candidate = now_ms if now_ms is not None else int(time.time() * 1000)
    taken = {i.id for i in existing}
    while candidate in taken:
        candidate += 1
    return ItemId(candidate)


def build_new_item(
    submission: CreateSubmission,
    kind: DashboardKind,
    existing: list[FundableItem],
    now_ms: int | None = None,
) -> FundableItem:
    item = FundableItem(
        id=next_item_id(existing, now_ms),
        title=submission.title,
        description=submission.description,
        category=submission.category,
        icon=icon_for_category(submission.category, kind),
        goal=submission.goal,
        raised=0,
        donors=0,
        days_left=submission.duration,
        status=ItemStatus.ACTIVE.value,
        impact=submission.impact or None,
        risk=submission.risk or None,
        shopify_store=submission.shopify_store or None,
    )
    if kind is DashboardKind.INVESTOR:
        item = item.with_changes(
            invested=submission.goal,
            current_value=submission.goal,
            roi=0,
            duration=f"{submission.duration} months",
        )
    return item


def apply_edit(
    item: FundableItem, submission: EditSubmission, kind: DashboardKind,
) -> FundableItem:
    common = {
        "title": submission.title,
        "description": submission.description,
        "category": submission.category,
        "shopify_store": submission.shopify_store or None,
    }
    if kind is DashboardKind.DONOR:
        goal = submission.goal if submission.goal is not None else item.goal
        return item.with_changes(**common, goal=goal)

    invested = (
        submission.invested if submission.invested is not None
        else (item.invested or 0)
    )
    current_value = submission.current_value or invested
    return item.with_changes(
        **common,
        invested=invested,
        current_value=current_value,
        roi=recompute_roi(invested, submission.current_value or 0, item.roi),
        risk=submission.risk if submission.risk is not None else item.risk,
        duration=(
            submission.duration if submission.duration is not None
            else item.duration
        ),
    )


def filter_items(
    items: list[FundableItem], item_filter: ItemFilter,
) -> list[FundableItem]:
    """Apply a dashboard filter. Filters a dashboard does not offer match all."""
    if item_filter is ItemFilter.ACTIVE:
        return [i for i in items if i.status == ItemStatus.ACTIVE.value]
    if item_filter is ItemFilter.COMPLETED:
        return [i for i in items if i.status == ItemStatus.COMPLETED.value]
    if item_filter is ItemFilter.TOP_PERFORMERS:
        return [i for i in items if (i.roi or 0) > TOP_PERFORMER_ROI]
    return list(items)
