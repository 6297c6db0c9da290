"""Metrics calculator routes."""

import pytest


async def test_progress(client):
    response = await client.get(
        "/api/v1/metrics/progress", params={"raised": 37500, "goal": 50000},
    )
    assert response.json() == {"progress": 75.0, "remaining": 12500.0}


@pytest.mark.parametrize("raised", [0, 10])
async def test_progress_with_zero_goal_is_null(client, raised):
    response = await client.get(
        "/api/v1/metrics/progress", params={"raised": raised, "goal": 0},
    )
    assert response.status_code == 200
    assert response.json()["progress"] is None


async def test_roi_defaults(client):
    response = await client.get("/api/v1/metrics/roi", params={"investment": 10000})
    assert response.json() == {
        "monthly_return": 125.0, "total_return": 1500.0, "final_amount": 11500.0,
    }


async def test_roi_rejects_negative_investment(client):
    response = await client.get("/api/v1/metrics/roi", params={"investment": -1})
    assert response.status_code == 400
