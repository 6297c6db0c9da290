"""Commerce Client — httpx wrapper for the platform's OAuth token exchange and Admin GraphQL API.

Invariants:
    - One attempt per call: no retry, no backoff, no pagination
    - Transport failures, non-2xx statuses, non-JSON bodies and GraphQL errors
      without data all surface as CommerceAPIError (core/errors.py)
    - Access tokens and the app secret never appear in log lines or errors

Design Decisions:
    - Long-lived AsyncClient created in the lifespan, closed on shutdown
    - transport is injectable so tests can answer with httpx.MockTransport
"""

import logging
from typing import Any

import httpx

from fundboard.core.errors import CommerceAPIError, ErrorContext

logger = logging.getLogger(__name__)


class CommerceClient:
    """Single-shot calls to the commerce platform with error mapping."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        api_version: str = "2023-10",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_secret = api_secret
        self.api_version = api_version
        self.client = httpx.AsyncClient(
            timeout=timeout_seconds, transport=transport,
        )

    async def exchange_code(
        self, shop: str, code: str, context: ErrorContext | None = None,
    ) -> dict[str, Any]:
        """Trade an OAuth code for an offline access token."""
        body = await self._post_json(
            f"https://{shop}/admin/oauth/access_token",
            json={
                "client_id": self.api_key,
                "client_secret": self.api_secret,
                "code": code,
            },
            context=context,
        )
        if not isinstance(body, dict) or not body.get("access_token"):
            raise CommerceAPIError(
                "Token exchange returned no access token",
                "invalid_response", context=context,
            )
        logger.info("OAuth code exchanged", extra={"shop": shop})
        return body

    async def graphql(
        self,
        shop: str,
        access_token: str,
        query: str,
        variables: dict[str, Any] | None = None,
        context: ErrorContext | None = None,
    ) -> dict[str, Any]:
        """Run one Admin GraphQL query and return the response body."""
        body = await self._post_json(
            f"https://{shop}/admin/api/{self.api_version}/graphql.json",
            json={"query": query, "variables": variables or {}},
            headers={"X-Shopify-Access-Token": access_token},
            context=context,
        )
        if not isinstance(body, dict):
            raise CommerceAPIError(
                "GraphQL response is not an object",
                "invalid_response", context=context,
            )
        if body.get("errors") and not body.get("data"):
            logger.warning(
                f"GraphQL errors: {body['errors']}", extra={"shop": shop},
            )
            raise CommerceAPIError(
                "GraphQL query failed", "graphql_error", context=context,
            )
        return body

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _post_json(
        self,
        url: str,
        *,
        json: dict,
        headers: dict[str, str] | None = None,
        context: ErrorContext | None,
    ) -> Any:
        try:
            response = await self.client.post(url, json=json, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException:
            raise CommerceAPIError(
                "Commerce API timeout", "timeout", context=context,
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(
                f"Commerce API returned {status}",
                extra={"upstream_status": status, "path": e.request.url.path},
            )
            raise CommerceAPIError(
                f"Commerce API returned HTTP {status}",
                "http_status", upstream_status=status, context=context,
            )
        except httpx.TransportError as e:
            raise CommerceAPIError(
                f"Connection error: {type(e).__name__}",
                "connection_error", context=context,
            )
        except ValueError:
            raise CommerceAPIError(
                "Commerce API returned a non-JSON body",
                "invalid_response", context=context,
            )
