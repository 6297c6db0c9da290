"""Health probes and the environment check."""


async def test_liveness(client):
    response = await client.get("/api/v1/health/")
    assert response.status_code == 200
    assert response.json()["service"] == "fundboard-api"


async def test_readiness_with_database(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"


async def test_env_check_reports_presence_not_secrets(client):
    response = await client.get("/api/env-check")
    data = response.json()
    assert data["hasShopifyApiKey"] is True
    assert data["hasShopifyApiSecret"] is True
    assert data["shopifyAppHostName"] == "https://fundboard.test"
    assert "test-secret" not in response.text
