"""Commerce Gateway — OAuth handshake and fixed product/order queries for one shop.

Invariants:
    - begin_auth issues a fresh state nonce per shop; complete_auth consumes it
    - complete_auth verifies the callback HMAC, its timestamp and the state
      before exchanging the code
    - A state nonce lives STATE_TTL_SECONDS; expired entries are pruned on
      every begin_auth and rejected by complete_auth
    - A completed handshake persists the session as "offline_{shop}" (overwrite)
    - Product/order reads need a stored session; missing -> CommerceSessionMissingError
    - Responses are the platform's nodes unchanged (edges unwrapped, nothing else)

Design Decisions:
    - _pending_states as module-level dict: single-process server, a restart
      drops handshakes in flight
    - No retry/backoff/pagination: one call per request
"""

import logging
import secrets
import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fundboard.config import Settings
from fundboard.core.errors import (
    CommerceSessionMissingError, ErrorContext, InvalidShopError, OAuthCallbackError,
)
from fundboard.core.shop_domain import (
    build_authorize_url, dashboard_redirect_url, sanitize_shop, verify_callback,
)
from fundboard.infrastructure.commerce_client import CommerceClient
from fundboard.models.commerce_session import CommerceSession, offline_session_id
from fundboard.services.commerce_queries import (
    DEFAULT_ORDERS_LIMIT, ORDERS_QUERY, PRODUCTS_PAGE_SIZE, PRODUCTS_QUERY,
)

logger = logging.getLogger(__name__)

STATE_TTL_SECONDS = 600

# shop -> (state, issued at on the monotonic clock)
_pending_states: dict[str, tuple[str, float]] = {}


def _prune_expired_states(now: float) -> None:
    for shop in [s for s, (_, issued) in _pending_states.items()
                 if now - issued > STATE_TTL_SECONDS]:
        del _pending_states[shop]


def require_shop(shop: str | None) -> str:
    """Sanitized shop domain or InvalidShopError."""
    clean = sanitize_shop(shop)
    if not clean:
        raise InvalidShopError(shop, ErrorContext(shop=shop))
    return clean


def unwrap_edges(body: dict[str, Any], connection: str) -> list[dict]:
    """data.<connection>.edges[].node, or [] when any level is missing."""
    data = body.get("data") or {}
    edges = (data.get(connection) or {}).get("edges") or []
    return [e["node"] for e in edges if isinstance(e, dict) and "node" in e]


class CommerceGateway:
    """Request/response relay to the commerce platform."""

    def __init__(
        self, db: AsyncSession, client: CommerceClient, settings: Settings,
    ):
        self.db = db
        self.client = client
        self.settings = settings

    # ─── OAuth ───────────────────────────────────────────────────

    def begin_auth(self, shop: str | None) -> str:
        """Authorize URL the browser is redirected to."""
        clean = require_shop(shop)
        now = time.monotonic()
        _prune_expired_states(now)
        state = secrets.token_urlsafe(16)
        _pending_states[clean] = (state, now)
        logger.info("OAuth started", extra={"shop": clean})
        return build_authorize_url(
            clean,
            self.settings.shopify_api_key,
            self.settings.shopify_api_secret,
            self.settings.shopify_api_version,
            self.settings.shopify_scopes,
            self.settings.shopify_app_url,
            state,
        )

    async def complete_auth(self, params: dict[str, str]) -> str:
        """Verify the callback, exchange the code, store the session.

        Returns the dashboard URL to redirect to.
        """
        if not params.get("shop") or not params.get("code"):
            raise OAuthCallbackError("Missing required parameters")
        shop = require_shop(params["shop"])
        context = ErrorContext(shop=shop)

        if not verify_callback(
            params, self.settings.shopify_api_key, self.settings.shopify_api_secret,
        ):
            raise OAuthCallbackError("Callback signature is invalid or expired", context)
        pending = _pending_states.pop(shop, None)
        if pending is None:
            raise OAuthCallbackError("OAuth state does not match", context)
        expected_state, issued = pending
        if time.monotonic() - issued > STATE_TTL_SECONDS:
            raise OAuthCallbackError("OAuth state has expired", context)
        if params.get("state") != expected_state:
            raise OAuthCallbackError("OAuth state does not match", context)

        token = await self.client.exchange_code(shop, params["code"], context)
        await self._store_session(shop, token)
        logger.info("OAuth completed", extra={"shop": shop})
        return dashboard_redirect_url(self.settings.shopify_app_url, shop)

    async def _store_session(self, shop: str, token: dict[str, Any]) -> None:
        session_id = offline_session_id(shop)
        existing = await self.db.get(CommerceSession, session_id)
        if existing:
            existing.access_token = token["access_token"]
            existing.scope = token.get("scope", "")
        else:
            self.db.add(CommerceSession(
                id=session_id, shop=shop,
                access_token=token["access_token"],
                scope=token.get("scope", ""),
            ))
        await self.db.commit()

    # ─── Data ────────────────────────────────────────────────────

    async def fetch_products(self, shop: str | None) -> list[dict]:
        clean = require_shop(shop)
        session = await self._load_session(clean)
        body = await self.client.graphql(
            clean, session.access_token, PRODUCTS_QUERY,
            {"first": PRODUCTS_PAGE_SIZE}, ErrorContext(shop=clean),
        )
        return unwrap_edges(body, "products")

    async def fetch_orders(
        self, shop: str | None, limit: int = DEFAULT_ORDERS_LIMIT,
    ) -> list[dict]:
        clean = require_shop(shop)
        session = await self._load_session(clean)
        body = await self.client.graphql(
            clean, session.access_token, ORDERS_QUERY,
            {"first": limit}, ErrorContext(shop=clean),
        )
        return unwrap_edges(body, "orders")

    async def _load_session(self, shop: str) -> CommerceSession:
        session = await self.db.get(CommerceSession, offline_session_id(shop))
        if not session:
            raise CommerceSessionMissingError(shop)
        return session
