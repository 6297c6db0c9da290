"""Commerce routes — OAuth redirects and product/order relay over HTTP."""

import time
from urllib.parse import parse_qs, urlparse

import httpx
import shopify

SHOP = "demo.myshopify.com"
GRAPHQL_PATH = "/admin/api/2023-10/graphql.json"


async def _begin(client) -> str:
    response = await client.get("/api/auth/shopify", params={"shop": SHOP})
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]


def _signed(params: dict[str, str]) -> dict[str, str]:
    params = {"timestamp": str(int(time.time())), **params}
    shopify.Session.setup(api_key="test-key", secret="test-secret")
    return {**params, "hmac": shopify.Session.calculate_hmac(params)}


# -- OAuth ---------------------------------------------------------------------

async def test_begin_redirects_to_authorize_screen(client):
    response = await client.get("/api/auth/shopify", params={"shop": "demo"})
    assert response.status_code == 302
    location = urlparse(response.headers["location"])
    assert location.netloc == SHOP
    assert location.path == "/admin/oauth/authorize"


async def test_begin_without_shop_is_400(client):
    response = await client.get("/api/auth/shopify")
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Shop parameter is required"


async def test_begin_with_foreign_host_is_400(client):
    response = await client.get("/api/auth/shopify", params={"shop": "evil.com"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_SHOP"


async def test_callback_redirects_to_dashboard(client):
    state = await _begin(client)
    response = await client.get(
        "/api/auth/shopify/callback",
        params=_signed({"shop": SHOP, "code": "abc", "state": state}),
    )
    assert response.status_code == 302
    assert response.headers["location"] == (
        f"https://fundboard.test/dashboard?shop={SHOP}&installed=true"
    )


async def test_callback_with_bad_signature_is_400(client):
    state = await _begin(client)
    response = await client.get(
        "/api/auth/shopify/callback",
        params={"shop": SHOP, "code": "abc", "state": state, "hmac": "00"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "OAUTH_CALLBACK_INVALID"


async def test_replayed_old_callback_is_400(client, commerce_api):
    state = await _begin(client)
    stale = str(int(time.time()) - 3 * 24 * 60 * 60)
    response = await client.get(
        "/api/auth/shopify/callback",
        params=_signed({"shop": SHOP, "code": "abc", "state": state, "timestamp": stale}),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "OAUTH_CALLBACK_INVALID"
    assert commerce_api["requests"] == []


async def test_callback_missing_code_is_400(client):
    response = await client.get("/api/auth/shopify/callback", params={"shop": SHOP})
    assert response.status_code == 400


async def test_callback_exchange_failure_is_generic(client, commerce_api):
    commerce_api["responses"]["/admin/oauth/access_token"] = httpx.ConnectError("down")
    state = await _begin(client)
    response = await client.get(
        "/api/auth/shopify/callback",
        params=_signed({"shop": SHOP, "code": "abc", "state": state}),
    )
    assert response.status_code == 503
    assert response.json()["error"]["message"] == (
        "Failed to complete Shopify authentication"
    )


# -- Products & orders ---------------------------------------------------------

async def test_install_then_fetch_products(client, commerce_api):
    state = await _begin(client)
    await client.get(
        "/api/auth/shopify/callback",
        params=_signed({"shop": SHOP, "code": "abc", "state": state}),
    )
    commerce_api["responses"][GRAPHQL_PATH] = httpx.Response(200, json={
        "data": {"products": {"edges": [{"node": {"id": "p1", "title": "Mug"}}]}},
    })

    response = await client.get("/api/shopify/products", params={"shop": SHOP})
    assert response.status_code == 200
    assert response.json() == {"products": [{"id": "p1", "title": "Mug"}]}
    assert commerce_api["requests"][-1].headers["X-Shopify-Access-Token"] == "shpat_test"


async def test_orders(client, stored_session, commerce_api):
    commerce_api["responses"][GRAPHQL_PATH] = httpx.Response(200, json={
        "data": {"orders": {"edges": [{"node": {"id": "o1"}}]}},
    })
    response = await client.get(
        "/api/shopify/orders", params={"shop": SHOP, "limit": 10},
    )
    assert response.json() == {"orders": [{"id": "o1"}]}


async def test_products_without_session_is_401(client):
    response = await client.get("/api/shopify/products", params={"shop": SHOP})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "No valid session found"


async def test_products_without_shop_is_400(client):
    response = await client.get("/api/shopify/products")
    assert response.status_code == 400


async def test_upstream_failure_is_generic(client, stored_session, commerce_api):
    commerce_api["responses"][GRAPHQL_PATH] = httpx.Response(500)
    response = await client.get("/api/shopify/orders", params={"shop": SHOP})
    assert response.status_code == 502
    assert response.json()["error"]["message"] == "Failed to fetch orders"


async def test_orders_limit_out_of_range_is_400(client):
    response = await client.get(
        "/api/shopify/orders", params={"shop": SHOP, "limit": 0},
    )
    assert response.status_code == 400
