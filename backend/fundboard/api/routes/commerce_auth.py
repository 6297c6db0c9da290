"""Commerce OAuth — begin and complete the store install handshake.

Invariants:
    - Both routes are GET-only and answer with a 302 redirect on success
    - Missing/invalid shop -> 400; bad callback signature or state -> 400
    - Token-exchange failures surface as the generic "Failed to complete ..." message
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse

from fundboard.api.dependencies import get_commerce_gateway
from fundboard.core.errors import CommerceAPIError
from fundboard.services.commerce_gateway import CommerceGateway

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth/shopify", tags=["commerce-auth"])


@router.get("")
async def begin_auth(
    shop: str | None = Query(None),
    gateway: CommerceGateway = Depends(get_commerce_gateway),
):
    """Redirect the merchant to the platform's authorize screen."""
    url = gateway.begin_auth(shop)
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.get("/callback")
async def auth_callback(
    request: Request,
    gateway: CommerceGateway = Depends(get_commerce_gateway),
):
    """Finish the handshake and send the merchant to the dashboard."""
    try:
        url = await gateway.complete_auth(dict(request.query_params))
    except CommerceAPIError as e:
        logger.error(
            f"Commerce callback error: {e.message}",
            extra={"shop": e.context.shop, "error_code": e.code},
        )
        raise CommerceAPIError(
            "Failed to complete Shopify authentication",
            e.api_error_type, e.upstream_status, e.context,
        ) from e
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)
