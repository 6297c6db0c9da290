"""Shop Domain & OAuth Primitives — shop sanitizing plus the platform SDK's OAuth checks.

Invariants:
    - sanitize_shop returns a bare lowercase "<name>.<platform domain>" host or None
    - build_authorize_url never includes the app secret
    - verify_callback accepts only a correctly signed callback whose timestamp
      is less than a day old (ShopifyAPI Session.validate_params); malformed
      timestamps are rejected, never raised

Design Decisions:
    - The ShopifyAPI SDK keeps app credentials on the Session class; every
      helper here sets them right before use, with no await in between
    - myshopify_domain follows the sanitized shop so dev-store hosts
      (myshopify.io, shop.dev) keep their own domain in the authorize URL
"""

import re
from urllib.parse import urlencode

import shopify

CALLBACK_PATH = "/api/auth/shopify/callback"

_SHOP_RE = re.compile(
    r"^[a-z0-9][a-z0-9-]*\.(myshopify\.com|myshopify\.io|shop\.dev)$",
)


def sanitize_shop(shop: str | None) -> str | None:
    """Normalize user-supplied shop input; None when it is not a shop domain."""
    if not shop:
        return None
    host = shop.strip().lower()
    host = re.sub(r"^https?://", "", host).rstrip("/")
    if "." not in host:
        host = f"{host}.myshopify.com"
    return host if _SHOP_RE.match(host) else None


def app_base_url(app_url: str) -> str:
    """App URL with a scheme and no trailing slash."""
    url = app_url.rstrip("/")
    if not re.match(r"^https?://", url):
        url = f"https://{url}"
    return url


def _configure_sdk(api_key: str, api_secret: str, shop: str | None = None) -> None:
    settings = {"api_key": api_key, "secret": api_secret}
    if shop:
        settings["myshopify_domain"] = shop.split(".", 1)[1]
    shopify.Session.setup(**settings)


def build_authorize_url(
    shop: str,
    api_key: str,
    api_secret: str,
    api_version: str,
    scopes: list[str],
    app_url: str,
    state: str,
) -> str:
    """Authorize screen URL for a sanitized shop."""
    _configure_sdk(api_key, api_secret, shop)
    session = shopify.Session(shop, api_version)
    return session.create_permission_url(
        redirect_uri=app_base_url(app_url) + CALLBACK_PATH,
        scope=scopes,
        state=state,
    )


def verify_callback(params: dict[str, str], api_key: str, api_secret: str) -> bool:
    """HMAC and freshness check of the OAuth callback query."""
    _configure_sdk(api_key, api_secret)
    try:
        return shopify.Session.validate_params(params)
    except (TypeError, ValueError):
        return False


def dashboard_redirect_url(app_url: str, shop: str) -> str:
    query = urlencode({"shop": shop, "installed": "true"})
    return f"{app_base_url(app_url)}/dashboard?{query}"
