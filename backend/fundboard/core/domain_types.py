"""Domain Types — enums and identity types shared by the dashboard core.

Invariants:
    - ItemId wraps int — ids are unique within one local list only
    - DashboardKind values double as the URL segment for dashboard routes
    - StorageKey values are the exact local-storage keys the browser uses

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Statuses kept as plain strings on items (edits may carry any status);
      enums here name the values the dashboards act on
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ItemId = NewType("ItemId", int)
ClientId = NewType("ClientId", str)

DEFAULT_CLIENT_ID = ClientId("anonymous")


# ─── Enums ───────────────────────────────────────────────────────

class DashboardKind(str, Enum):
    """Which dashboard a list of items belongs to."""
    DONOR = "donor"
    INVESTOR = "investor"


class StorageKey(str, Enum):
    """Local-storage keys per dashboard."""
    DONOR_PROJECTS = "donor-projects"
    INVESTOR_INVESTMENTS = "investor-investments"


STORAGE_KEYS: dict[DashboardKind, StorageKey] = {
    DashboardKind.DONOR: StorageKey.DONOR_PROJECTS,
    DashboardKind.INVESTOR: StorageKey.INVESTOR_INVESTMENTS,
}


class ItemStatus(str, Enum):
    """Known item statuses across both dashboards."""
    ACTIVE = "active"
    NEARLY_COMPLETE = "nearly-complete"
    COMPLETED = "completed"
    DECLINING = "declining"
    MATURE = "mature"


class ItemFilter(str, Enum):
    """Dashboard list filters."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"
    TOP_PERFORMERS = "top-performers"


FILTERS_BY_KIND: dict[DashboardKind, tuple[ItemFilter, ...]] = {
    DashboardKind.DONOR: (ItemFilter.ALL, ItemFilter.ACTIVE, ItemFilter.COMPLETED),
    DashboardKind.INVESTOR: (
        ItemFilter.ALL, ItemFilter.ACTIVE, ItemFilter.TOP_PERFORMERS,
    ),
}

# Investments above this ROI (percent) count as top performers
TOP_PERFORMER_ROI = 15


class RiskLevel(str, Enum):
    """Investment risk as stored on items; forms may send any casing."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ImpactLevel(str, Enum):
    """Donor project impact as stored on items."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"
