"""Fundable Item — the donor project / investor holding record.

Invariants:
    - raised (or current_value) is conceptually bounded by goal but NOT enforced
    - id is unique within one local list only
    - icon is always an Icon here; the stored form carries iconName instead
    - Investor-only fields are None on donor items

Design Decisions:
    - Plain dataclass, no IO: the store and codec do persistence
    - One shape for both dashboards: the original merged investor fields into
      the same object, and edits preserve fields they do not touch
"""

from dataclasses import dataclass, field, replace

from fundboard.core.domain_types import ItemId, ItemStatus
from fundboard.core.icons import Icon


@dataclass
class FundableItem:
    """A donor project or investor holding tracked by a dashboard."""

    id: ItemId
    title: str
    description: str = ""
    category: str = ""
    icon: Icon = Icon.STORE
    goal: float = 0
    raised: float = 0
    donors: int = 0
    days_left: int = 0
    status: str = ItemStatus.ACTIVE.value
    impact: str | None = None
    risk: str | None = None
    duration: str | None = None
    shopify_store: str | None = None

    # === Investor-only ===
    invested: float | None = None
    current_value: float | None = None
    roi: float | None = None
    project_goal: float | None = None
    total_invested: float | None = None

    # Stored keys this model does not know about, kept for round-trips
    extra: dict = field(default_factory=dict)

    def with_changes(self, **changes) -> "FundableItem":
        """Copy with the given fields replaced."""
        return replace(self, **changes)
