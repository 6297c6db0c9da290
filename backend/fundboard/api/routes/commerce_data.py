"""Commerce Data — products and orders relayed from the platform's GraphQL API.

Invariants:
    - Responses are {"products": [...]} / {"orders": [...]} with platform nodes as-is
    - No stored session for the shop -> 401
    - Upstream failures surface as "Failed to fetch products/orders"
"""

import logging

from fastapi import APIRouter, Depends, Query

from fundboard.api.dependencies import get_commerce_gateway
from fundboard.core.errors import CommerceAPIError
from fundboard.services.commerce_gateway import CommerceGateway
from fundboard.services.commerce_queries import DEFAULT_ORDERS_LIMIT

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/shopify", tags=["commerce-data"])


def _generic_failure(e: CommerceAPIError, what: str) -> CommerceAPIError:
    logger.error(
        f"Commerce {what} error: {e.message}",
        extra={"shop": e.context.shop, "error_code": e.code},
    )
    return CommerceAPIError(
        f"Failed to fetch {what}", e.api_error_type, e.upstream_status, e.context,
    )


@router.get("/products")
async def list_products(
    shop: str | None = Query(None),
    gateway: CommerceGateway = Depends(get_commerce_gateway),
):
    try:
        products = await gateway.fetch_products(shop)
    except CommerceAPIError as e:
        raise _generic_failure(e, "products") from e
    return {"products": products}


@router.get("/orders")
async def list_orders(
    shop: str | None = Query(None),
    limit: int = Query(DEFAULT_ORDERS_LIMIT, ge=1, le=250),
    gateway: CommerceGateway = Depends(get_commerce_gateway),
):
    try:
        orders = await gateway.fetch_orders(shop, limit)
    except CommerceAPIError as e:
        raise _generic_failure(e, "orders") from e
    return {"orders": orders}
