"""Icon Lookup — name-to-symbol tables for re-resolving item icons after hydration.

Invariants:
    - Stored items carry iconName (str); in-memory items carry Icon
    - Unknown or missing names resolve to the dashboard default, never raise
    - Every icon a category can produce is present in its dashboard's table,
      so saving then loading reconstructs the same Icon

Design Decisions:
    - Per-dashboard tables: a donor list never hydrates investor symbols
    - Category lookup accepts both form values ("clean-energy") and
      display labels ("Clean Energy")
"""

from enum import Enum

from fundboard.core.domain_types import DashboardKind


class Icon(str, Enum):
    """Card icon symbols. Value is the name persisted as iconName."""
    BOOK_OPEN = "BookOpen"
    HEART = "Heart"
    HOME = "Home"
    SHIELD = "Shield"
    SMARTPHONE = "Smartphone"
    LEAF = "Leaf"
    BUILDING2 = "Building2"
    ZAP = "Zap"
    STORE = "Store"


DEFAULT_ICONS: dict[DashboardKind, Icon] = {
    DashboardKind.DONOR: Icon.BOOK_OPEN,
    DashboardKind.INVESTOR: Icon.SMARTPHONE,
}

_ICON_TABLES: dict[DashboardKind, dict[str, Icon]] = {
    DashboardKind.DONOR: {
        i.value: i for i in (
            Icon.BOOK_OPEN, Icon.HEART, Icon.HOME, Icon.SHIELD, Icon.STORE,
        )
    },
    DashboardKind.INVESTOR: {
        i.value: i for i in (
            Icon.SMARTPHONE, Icon.LEAF, Icon.BUILDING2, Icon.ZAP, Icon.STORE,
        )
    },
}

# (form value, display label, icon)
_CATEGORIES: dict[DashboardKind, tuple[tuple[str, str, Icon], ...]] = {
    DashboardKind.DONOR: (
        ("education", "Education", Icon.BOOK_OPEN),
        ("health", "Health", Icon.HEART),
        ("infrastructure", "Infrastructure", Icon.HOME),
        ("safety", "Safety", Icon.SHIELD),
        ("shopify", "Shopify Store", Icon.STORE),
    ),
    DashboardKind.INVESTOR: (
        ("technology", "Technology", Icon.SMARTPHONE),
        ("clean-energy", "Clean Energy", Icon.LEAF),
        ("real-estate", "Real Estate", Icon.BUILDING2),
        ("cryptocurrency", "Cryptocurrency", Icon.ZAP),
        ("shopify", "Shopify Store", Icon.STORE),
    ),
}


def resolve_icon(name: str | None, kind: DashboardKind) -> Icon:
    """Map a stored iconName back to its Icon, falling back to the dashboard default."""
    if not name:
        return DEFAULT_ICONS[kind]
    return _ICON_TABLES[kind].get(name, DEFAULT_ICONS[kind])


def icon_for_category(category: str, kind: DashboardKind) -> Icon:
    """Icon a newly created item gets for its category. Unknown → Store."""
    for value, label, icon in _CATEGORIES[kind]:
        if category in (value, label):
            return icon
    return Icon.STORE
