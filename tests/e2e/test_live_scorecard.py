"""
E2E tests against the real College Scorecard API.

These tests need a real key:
    DATAGOV_API_KEY=... pytest -m integration

Schools used:
- Georgia Institute of Technology (139755): public, net price published
- Emory University (139658): private nonprofit
"""

import os
import pytest
from fastapi.testclient import TestClient
from scorecard_gateway.api.main import create_app
from scorecard_gateway.config import Settings

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not os.getenv("DATAGOV_API_KEY"), reason="DATAGOV_API_KEY not set"),
]


@pytest.fixture
def live_client() -> TestClient:
    return TestClient(create_app(Settings()))


def test_search_georgia_schools(live_client: TestClient):
    response = live_client.get("/api/schools", params={"q": "GA", "per_page": "5"})

    assert response.status_code == 200
    results = response.json()["results"]
    assert 0 < len(results) <= 5
    assert all(r["school.state"] == "GA" for r in results)
    names = [r["school.name"] for r in results]
    assert names == sorted(names)


def test_search_by_name(live_client: TestClient):
    response = live_client.get("/api/schools", params={"q": "Georgia Institute"})

    assert response.status_code == 200
    assert any(r["id"] == 139755 for r in response.json()["results"])


def test_estimate_public_school(live_client: TestClient):
    response = live_client.post("/api/estimate", json={"schoolId": 139755, "income": 65000})

    assert response.status_code == 200
    data = response.json()
    assert data["bracket"] == "48001-75000"
    assert data["netPrice"] > 0
    breakdown = data["breakdown"]
    if data["netPrice"] - breakdown["grants"] - breakdown["workStudy"] >= 0:
        assert sum(breakdown.values()) == pytest.approx(data["netPrice"])


def test_estimate_unknown_school(live_client: TestClient):
    response = live_client.post("/api/estimate", json={"schoolId": 1, "income": 50000})
    assert response.status_code == 404


def test_acceptance_rate(live_client: TestClient):
    response = live_client.get("/api/acceptance", params={"id": "139658"})

    assert response.status_code == 200
    pct = response.json()["acceptanceRatePct"]
    assert pct is None or 0 <= pct <= 100
