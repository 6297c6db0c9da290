"""Dashboard Items — list, summarize, create, view, edit and remove fundable items.

Invariants:
    - Every route is scoped to the caller's client id (X-Client-Id)
    - Mutations persist the full list before responding
    - Filters a dashboard does not offer are rejected with 400
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from fundboard.api.dependencies import get_item_store
from fundboard.core.domain_types import FILTERS_BY_KIND, DashboardKind, ItemFilter
from fundboard.core.errors import ItemValidationError
from fundboard.core.metrics import summarize_donor, summarize_investor
from fundboard.schemas.items import (
    DonorSummaryResponse, InvestorSummaryResponse, ItemCreate,
    ItemListResponse, ItemResponse, ItemUpdate,
)
from fundboard.services.item_store import ItemStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["items"])


@router.get("/dashboards/{kind}/items", response_model=ItemListResponse)
async def list_items(
    kind: DashboardKind,
    item_filter: ItemFilter = Query(ItemFilter.ALL, alias="filter"),
    store: ItemStore = Depends(get_item_store),
):
    """Items of one dashboard with card metrics."""
    if item_filter not in FILTERS_BY_KIND[kind]:
        raise ItemValidationError(
            f"Filter '{item_filter.value}' is not available on the "
            f"{kind.value} dashboard",
            "filter",
        )
    items = await store.list_items(kind, item_filter)
    return ItemListResponse(
        items=[ItemResponse.from_item(i, kind) for i in items],
        filter=item_filter.value,
        count=len(items),
    )


@router.get(
    "/dashboards/{kind}/summary",
    response_model=DonorSummaryResponse | InvestorSummaryResponse,
)
async def dashboard_summary(
    kind: DashboardKind, store: ItemStore = Depends(get_item_store),
):
    """Stat-card totals for one dashboard."""
    items = await store.load(kind)
    if kind is DashboardKind.DONOR:
        return DonorSummaryResponse.from_summary(summarize_donor(items))
    return InvestorSummaryResponse.from_summary(summarize_investor(items))


@router.post(
    "/dashboards/{kind}/items",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    kind: DashboardKind,
    body: ItemCreate,
    store: ItemStore = Depends(get_item_store),
):
    """Create an item from a form submission; it goes to the top of the list."""
    item = await store.create(kind, body.to_submission())
    return ItemResponse.from_item(item, kind)


@router.get("/dashboards/{kind}/items/{item_id}", response_model=ItemResponse)
async def get_item(
    kind: DashboardKind,
    item_id: int,
    store: ItemStore = Depends(get_item_store),
):
    return ItemResponse.from_item(await store.get(kind, item_id), kind)


@router.put("/dashboards/{kind}/items/{item_id}", response_model=ItemResponse)
async def update_item(
    kind: DashboardKind,
    item_id: int,
    body: ItemUpdate,
    store: ItemStore = Depends(get_item_store),
):
    """Apply an edit form submission."""
    item = await store.update(kind, item_id, body.to_edit_submission(kind))
    return ItemResponse.from_item(item, kind)


@router.delete(
    "/dashboards/{kind}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_item(
    kind: DashboardKind,
    item_id: int,
    store: ItemStore = Depends(get_item_store),
):
    await store.delete(kind, item_id)


@router.get("/items/{item_id}", response_model=ItemResponse)
async def find_item(item_id: int, store: ItemStore = Depends(get_item_store)):
    """Item detail page lookup: investor list first, then donor list."""
    kind, item = await store.find_anywhere(item_id)
    return ItemResponse.from_item(item, kind)
