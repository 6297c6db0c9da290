"""Item Codec — local-storage serialization for fundable item lists.

Invariants:
    - encode_items never stores the Icon itself, only its iconName
    - decode_items re-resolves iconName through the dashboard's lookup table
    - decode_items(encode_items(items), kind) == items for items whose icon
      belongs to the kind's table
    - Malformed content (non-JSON, non-list, non-object entries, missing ids,
      non-numeric or non-finite numbers) raises MalformedStorageError only;
      callers decide the fallback
    - Unknown stored keys survive a decode/encode round-trip (FundableItem.extra)

Design Decisions:
    - Stored keys stay camelCase so a browser can sync its own localStorage
      value verbatim through the raw storage routes
    - Investor lists merge each stored entry over the seed with the same id,
      so entries saved before projectGoal/totalInvested existed gain them
"""

import json
import math
from typing import Any

from fundboard.core.domain_types import DashboardKind, ItemId
from fundboard.core.fundable_item import FundableItem
from fundboard.core.icons import resolve_icon
from fundboard.core.seed_data import investor_defaults

# attribute name -> stored key
_FIELD_KEYS: dict[str, str] = {
    "id": "id",
    "title": "title",
    "description": "description",
    "category": "category",
    "goal": "goal",
    "raised": "raised",
    "donors": "donors",
    "days_left": "daysLeft",
    "status": "status",
    "impact": "impact",
    "risk": "risk",
    "duration": "duration",
    "shopify_store": "shopifyStore",
    "invested": "invested",
    "current_value": "currentValue",
    "roi": "roi",
    "project_goal": "projectGoal",
    "total_invested": "totalInvested",
}
_NUMERIC_FIELDS = frozenset({
    "goal", "raised", "invested", "current_value", "roi",
    "project_goal", "total_invested",
})
_INT_FIELDS = frozenset({"donors", "days_left"})
_TEXT_FIELDS = frozenset({"title", "description", "category", "status"})
_ICON_KEYS = frozenset({"iconName", "icon"})
_KNOWN_KEYS = frozenset(_FIELD_KEYS.values()) | _ICON_KEYS | {"shopifyStoreUrl"}


class MalformedStorageError(ValueError):
    """Stored value could not be decoded into a list of items."""


# ─── Encode ──────────────────────────────────────────────────────

def item_to_record(item: FundableItem) -> dict[str, Any]:
    """One item as its stored JSON object (None fields omitted)."""
    record: dict[str, Any] = dict(item.extra)
    for attr, key in _FIELD_KEYS.items():
        value = getattr(item, attr)
        if value is not None:
            record[key] = value
    record["iconName"] = item.icon.value
    return record


def encode_items(items: list[FundableItem]) -> str:
    return json.dumps([item_to_record(i) for i in items], ensure_ascii=False)


# ─── Decode ──────────────────────────────────────────────────────

def _coerce_number(key: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise MalformedStorageError(f"{key}: expected a number, got {value!r}")
    try:
        number = float(value) if isinstance(value, str) else value
        finite = math.isfinite(number)
    except (ValueError, OverflowError) as e:
        raise MalformedStorageError(f"{key}: expected a number, got {value!r}") from e
    if not finite:
        raise MalformedStorageError(f"{key}: not a finite number, got {value!r}")
    return number


def record_to_item(record: dict[str, Any], kind: DashboardKind) -> FundableItem:
    """Rebuild an item from its stored JSON object."""
    if not isinstance(record, dict):
        raise MalformedStorageError(f"item entry is not an object: {record!r}")
    if "id" not in record:
        raise MalformedStorageError("item entry has no id")

    values: dict[str, Any] = {}
    for attr, key in _FIELD_KEYS.items():
        if key not in record:
            continue
        raw = record[key]
        if attr == "id":
            item_id = _coerce_number(key, raw)
            if item_id is None:
                raise MalformedStorageError("item entry has a null id")
            values[attr] = ItemId(int(item_id))
        elif attr in _NUMERIC_FIELDS:
            values[attr] = _coerce_number(key, raw)
        elif attr in _INT_FIELDS:
            number = _coerce_number(key, raw)
            values[attr] = int(number) if number is not None else 0
        elif attr in _TEXT_FIELDS:
            values[attr] = "" if raw is None else str(raw)
        else:
            values[attr] = None if raw is None else str(raw)

    for attr in ("goal", "raised"):
        if values.get(attr) is None:
            values[attr] = 0
    if values.get("status") is None:
        values.pop("status", None)
    if "shopify_store" not in values and record.get("shopifyStoreUrl"):
        values["shopify_store"] = str(record["shopifyStoreUrl"])

    icon_name = record.get("iconName")
    if not isinstance(icon_name, str):
        icon_name = None
    values["icon"] = resolve_icon(icon_name, kind)
    values["extra"] = {k: v for k, v in record.items() if k not in _KNOWN_KEYS}
    values.setdefault("title", "")
    return FundableItem(**values)


def _merge_over_seed(record: dict[str, Any], seeds: dict[int, dict]) -> dict:
    record_id = record.get("id")
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        return record
    seed = seeds.get(record_id)
    if seed is None:
        return record
    merged = dict(seed)
    merged.update(record)
    if not record.get("iconName"):
        merged["iconName"] = seed["iconName"]
    return merged


def decode_items(raw: str, kind: DashboardKind) -> list[FundableItem]:
    """Parse a stored value into items. Raises MalformedStorageError."""
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise MalformedStorageError(f"stored value is not JSON: {e}") from e
    if not isinstance(parsed, list):
        raise MalformedStorageError(
            f"stored value is {type(parsed).__name__}, expected a list",
        )
    if kind is DashboardKind.INVESTOR:
        seeds = {s.id: item_to_record(s) for s in investor_defaults()}
        parsed = [
            _merge_over_seed(r, seeds) if isinstance(r, dict) else r
            for r in parsed
        ]
    return [record_to_item(r, kind) for r in parsed]
