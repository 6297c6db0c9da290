"""Item Store — per-client project/investment lists persisted as local-storage entries.

Invariants:
    - Every mutation rewrites the whole list under the dashboard's storage key
    - Missing or malformed stored content hydrates to the dashboard defaults;
      malformed content is logged, never raised
    - Reads never write: defaults are only persisted by the first mutation
    - Last writer wins per (client_id, key); no conflict detection

Design Decisions:
    - The store owns IO; decoding, id allocation and edit rules live in core/
    - Item lookups across dashboards check investor first, then donor
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from fundboard.core.domain_types import (
    STORAGE_KEYS, DashboardKind, ItemFilter, ItemId,
)
from fundboard.core.errors import ErrorContext, ResourceNotFoundError
from fundboard.core.fundable_item import FundableItem
from fundboard.core.item_codec import (
    MalformedStorageError, decode_items, encode_items,
)
from fundboard.core.item_forms import (
    CreateSubmission, EditSubmission, apply_edit, build_new_item, filter_items,
)
from fundboard.core.seed_data import defaults_for
from fundboard.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class ItemStore:
    """Project/investment lists for one client."""

    def __init__(self, db: AsyncSession, client_id: str):
        self.db = db
        self.client_id = client_id

    # ─── Raw storage ─────────────────────────────────────────────

    async def read_raw(self, key: str) -> str | None:
        entry = await self.db.get(StorageEntry, (self.client_id, key))
        return entry.value if entry else None

    async def write_raw(self, key: str, value: str) -> None:
        entry = await self.db.get(StorageEntry, (self.client_id, key))
        if entry:
            entry.value = value
        else:
            self.db.add(StorageEntry(
                client_id=self.client_id, key=key, value=value,
            ))
        await self.db.commit()

    async def delete_raw(self, key: str) -> bool:
        entry = await self.db.get(StorageEntry, (self.client_id, key))
        if not entry:
            return False
        await self.db.delete(entry)
        await self.db.commit()
        return True

    # ─── Lists ───────────────────────────────────────────────────

    async def load(self, kind: DashboardKind) -> list[FundableItem]:
        key = STORAGE_KEYS[kind].value
        raw = await self.read_raw(key)
        if raw is None:
            return defaults_for(kind)
        try:
            return decode_items(raw, kind)
        except MalformedStorageError as e:
            logger.error(
                f"Error loading {kind.value} items from storage: {e}",
                extra={"client_id": self.client_id, "storage_key": key},
            )
            return defaults_for(kind)

    async def save(self, kind: DashboardKind, items: list[FundableItem]) -> None:
        await self.write_raw(STORAGE_KEYS[kind].value, encode_items(items))

    async def list_items(
        self, kind: DashboardKind, item_filter: ItemFilter = ItemFilter.ALL,
    ) -> list[FundableItem]:
        return filter_items(await self.load(kind), item_filter)

    async def get(self, kind: DashboardKind, item_id: int) -> FundableItem:
        for item in await self.load(kind):
            if item.id == item_id:
                return item
        raise self._not_found(item_id)

    async def find_anywhere(
        self, item_id: int,
    ) -> tuple[DashboardKind, FundableItem]:
        for kind in (DashboardKind.INVESTOR, DashboardKind.DONOR):
            for item in await self.load(kind):
                if item.id == item_id:
                    return kind, item
        raise self._not_found(item_id)

    async def create(
        self, kind: DashboardKind, submission: CreateSubmission,
    ) -> FundableItem:
        items = await self.load(kind)
        item = build_new_item(submission, kind, items)
        await self.save(kind, [item, *items])
        logger.info(
            f"Created {kind.value} item {item.id}",
            extra={"client_id": self.client_id, "item_id": item.id},
        )
        return item

    async def update(
        self, kind: DashboardKind, item_id: int, submission: EditSubmission,
    ) -> FundableItem:
        items = await self.load(kind)
        for index, item in enumerate(items):
            if item.id == item_id:
                updated = apply_edit(item, submission, kind)
                items[index] = updated
                await self.save(kind, items)
                return updated
        raise self._not_found(item_id)

    async def delete(self, kind: DashboardKind, item_id: int) -> None:
        items = await self.load(kind)
        remaining = [i for i in items if i.id != item_id]
        if len(remaining) == len(items):
            raise self._not_found(item_id)
        await self.save(kind, remaining)
        logger.info(
            f"Deleted {kind.value} item {item_id}",
            extra={"client_id": self.client_id, "item_id": item_id},
        )

    def _not_found(self, item_id: int) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            "Item", str(item_id),
            ErrorContext(client_id=self.client_id, item_id=ItemId(item_id)),
        )
