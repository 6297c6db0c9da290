"""Raw Local Storage — verbatim get/set/remove of a client's storage values.

Invariants:
    - Values are stored exactly as sent, even if they are not valid item JSON
    - Writing a dashboard key changes what that dashboard hydrates next
    - Last writer wins
"""

import logging

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel

from fundboard.api.dependencies import get_item_store
from fundboard.core.errors import ErrorContext, ResourceNotFoundError
from fundboard.services.item_store import ItemStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/storage", tags=["storage"])

_KEY = Path(min_length=1, max_length=100)


class StorageValue(BaseModel):
    value: str


@router.get("/{key}")
async def get_value(key: str = _KEY, store: ItemStore = Depends(get_item_store)):
    value = await store.read_raw(key)
    if value is None:
        raise ResourceNotFoundError(
            "Storage key", key, ErrorContext(client_id=store.client_id),
        )
    return {"key": key, "value": value}


@router.put("/{key}")
async def set_value(
    body: StorageValue,
    key: str = _KEY,
    store: ItemStore = Depends(get_item_store),
):
    await store.write_raw(key, body.value)
    logger.info(
        "Storage value written",
        extra={"client_id": store.client_id, "storage_key": key},
    )
    return {"key": key, "value": body.value}


@router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_value(key: str = _KEY, store: ItemStore = Depends(get_item_store)):
    if not await store.delete_raw(key):
        raise ResourceNotFoundError(
            "Storage key", key, ErrorContext(client_id=store.client_id),
        )
