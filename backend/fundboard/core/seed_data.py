"""Seed Data — default lists shown before a client has stored anything.

Invariants:
    - Functions return fresh lists: callers may mutate freely
    - Seed ids (1..3) are stable; investor hydration merges stored items over them
"""

from fundboard.core.domain_types import DashboardKind, ItemId
from fundboard.core.fundable_item import FundableItem
from fundboard.core.icons import Icon


def donor_defaults() -> list[FundableItem]:
    return [
        FundableItem(
            id=ItemId(1), title="Education Fund",
            description="Supporting local schools with technology and resources",
            category="Education", icon=Icon.BOOK_OPEN,
            goal=50000, raised=37500, donors=234, days_left=15,
            status="active", impact="High",
        ),
        FundableItem(
            id=ItemId(2), title="Healthcare Initiative",
            description="Providing medical care to underserved communities",
            category="Health", icon=Icon.HEART,
            goal=75000, raised=68000, donors=189, days_left=8,
            status="nearly-complete", impact="Critical",
        ),
        FundableItem(
            id=ItemId(3), title="Community Development",
            description="Building infrastructure and community centers",
            category="Infrastructure", icon=Icon.HOME,
            goal=100000, raised=25000, donors=156, days_left=45,
            status="active", impact="Medium",
        ),
    ]


def investor_defaults() -> list[FundableItem]:
    return [
        FundableItem(
            id=ItemId(1), title="Tech Startup Alpha",
            description="AI-powered productivity platform",
            category="Technology", icon=Icon.SMARTPHONE,
            invested=50000, current_value=62500, roi=25,
            status="active", risk="High", duration="18 months",
            project_goal=500000, total_invested=375000,
        ),
        FundableItem(
            id=ItemId(2), title="Green Energy Project",
            description="Solar panel manufacturing facility",
            category="Clean Energy", icon=Icon.LEAF,
            invested=75000, current_value=88500, roi=18,
            status="active", risk="Medium", duration="24 months",
            project_goal=750000, total_invested=525000,
        ),
        FundableItem(
            id=ItemId(3), title="Real Estate Fund",
            description="Commercial property development",
            category="Real Estate", icon=Icon.BUILDING2,
            invested=100000, current_value=115000, roi=15,
            status="active", risk="Low", duration="36 months",
            project_goal=1000000, total_invested=850000,
        ),
    ]


def defaults_for(kind: DashboardKind) -> list[FundableItem]:
    if kind is DashboardKind.DONOR:
        return donor_defaults()
    return investor_defaults()
