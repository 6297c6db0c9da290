"""Shop Domain & OAuth Primitives — sanitizing, authorize URL, callback checks."""

import time
from urllib.parse import parse_qs, urlparse

import pytest
import shopify

from fundboard.core.shop_domain import (
    CALLBACK_PATH, build_authorize_url, dashboard_redirect_url, sanitize_shop,
    verify_callback,
)

ONE_DAY = 24 * 60 * 60


def _signed(params: dict[str, str], secret: str = "secret") -> dict[str, str]:
    shopify.Session.setup(api_key="key-123", secret=secret)
    return {**params, "hmac": shopify.Session.calculate_hmac(params)}


def _callback(**overrides) -> dict[str, str]:
    params = {
        "shop": "demo.myshopify.com", "code": "abc", "state": "n",
        "timestamp": str(int(time.time())),
    }
    params.update(overrides)
    return params


@pytest.mark.parametrize("raw,expected", [
    ("demo.myshopify.com", "demo.myshopify.com"),
    ("https://Demo.myshopify.com/", "demo.myshopify.com"),
    ("demo", "demo.myshopify.com"),
    ("  my-store.myshopify.com ", "my-store.myshopify.com"),
])
def test_sanitize_accepts_shop_domains(raw, expected):
    assert sanitize_shop(raw) == expected


@pytest.mark.parametrize("raw", [
    None, "", "evil.com", "demo.myshopify.com.evil.com", "-bad.myshopify.com",
    "a/b.myshopify.com",
])
def test_sanitize_rejects_other_hosts(raw):
    assert sanitize_shop(raw) is None


def test_authorize_url_carries_client_scopes_redirect_and_state():
    url = build_authorize_url(
        "demo.myshopify.com", "key-123", "secret", "2023-10",
        ["read_products", "read_orders"], "fundboard.test", "nonce",
    )
    parsed = urlparse(url)
    query = parse_qs(parsed.query)
    assert parsed.scheme == "https"
    assert parsed.netloc == "demo.myshopify.com"
    assert parsed.path == "/admin/oauth/authorize"
    assert query["client_id"] == ["key-123"]
    assert query["scope"] == ["read_products,read_orders"]
    assert query["redirect_uri"] == ["https://fundboard.test" + CALLBACK_PATH]
    assert query["state"] == ["nonce"]
    assert "secret" not in url


def test_authorize_url_keeps_dev_store_domain():
    url = build_authorize_url(
        "demo.shop.dev", "key-123", "secret", "2023-10", ["read_products"],
        "https://fundboard.test", "nonce",
    )
    assert urlparse(url).netloc == "demo.shop.dev"


def test_fresh_signed_callback_verifies():
    assert verify_callback(_signed(_callback()), "key-123", "secret")


@pytest.mark.parametrize("params", [
    _signed(_callback(), secret="other-secret"),
    {**_signed(_callback()), "code": "xyz"},
    _callback(),
    {"shop": "x"},
], ids=["wrong-secret", "tampered", "unsigned", "bare"])
def test_bad_signature_is_rejected(params):
    assert not verify_callback(params, "key-123", "secret")


def test_day_old_callback_is_rejected():
    stale = _callback(timestamp=str(int(time.time()) - 2 * ONE_DAY))
    assert not verify_callback(_signed(stale), "key-123", "secret")


@pytest.mark.parametrize("timestamp", ["", "soon", "1.5e9"])
def test_unreadable_timestamp_is_rejected(timestamp):
    params = _signed(_callback(timestamp=timestamp))
    assert not verify_callback(params, "key-123", "secret")


def test_dashboard_redirect():
    assert dashboard_redirect_url("https://fundboard.test/", "demo.myshopify.com") == (
        "https://fundboard.test/dashboard?shop=demo.myshopify.com&installed=true"
    )
