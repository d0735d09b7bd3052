"""Pytest fixtures for testing"""

import pytest
import httpx
from typing import Any, Dict, List
from fastapi.testclient import TestClient
from scorecard_gateway.api.main import create_app
from scorecard_gateway.config import Settings
from scorecard_gateway.infrastructure.cache import QueryCache
from scorecard_gateway.infrastructure.clients.scorecard import ScorecardClient


TEST_API_BASE = "https://scorecard.test/v1/schools"


def net_prices(sector: str, values: List[Any]) -> Dict[str, Any]:
    """Flattened net-price fields for one sector, in bracket order"""
    brackets = ["0-30000", "30001-48000", "48001-75000", "75001-110000", "110001-plus"]
    return {
        f"latest.cost.net_price.{sector}.by_income_level.{bracket}": value
        for bracket, value in zip(brackets, values)
    }


@pytest.fixture
def georgia_tech() -> Dict[str, Any]:
    """Public school with a full public net-price table"""
    return {
        "id": 139755,
        "school.name": "Georgia Institute of Technology-Main Campus",
        "school.city": "Atlanta",
        "school.state": "GA",
        "school.ownership": 1,
        "latest.cost.tuition.in_state": 10258,
        "latest.cost.tuition.out_of_state": 31370,
        "latest.admissions.admission_rate.overall": 0.1684,
        **net_prices("public", [8000, 9500, 12000, 16000, 21000]),
        **net_prices("private", [None, None, None, None, None]),
    }


@pytest.fixture
def emory() -> Dict[str, Any]:
    """Private nonprofit school"""
    return {
        "id": 139658,
        "school.name": "Emory University",
        "school.city": "Atlanta",
        "school.state": "GA",
        "school.ownership": 2,
        "latest.cost.tuition.in_state": 57948,
        "latest.cost.tuition.out_of_state": 57948,
        "latest.admissions.admission_rate.overall": 0.1135,
        **net_prices("public", [None, None, None, None, None]),
        **net_prices("private", [9100, 11800, 17600, 26400, 48900]),
    }


@pytest.fixture
def umd() -> Dict[str, Any]:
    """Public school whose net price is only published in the private table"""
    return {
        "id": 163286,
        "school.name": "University of Maryland-College Park",
        "school.city": "College Park",
        "school.state": "MD",
        "school.ownership": 1,
        "latest.cost.tuition.in_state": 11505,
        "latest.cost.tuition.out_of_state": 40306,
        "latest.admissions.admission_rate.overall": None,
        **net_prices("public", [0, 0, 0, 0, 0]),
        **net_prices("private", [8000, 10000, 14000, 19000, 25000]),
    }


class FakeScorecard:
    """In-memory stand-in for the Scorecard schools endpoint, used as an httpx.MockTransport handler"""

    def __init__(self, records: List[Dict[str, Any]]):
        self.records = records
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.error_text = ""
        self.raise_error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if self.status_code != 200:
            return httpx.Response(self.status_code, text=self.error_text)

        params = request.url.params
        results = list(self.records)
        if "id" in params:
            results = [r for r in results if str(r["id"]) == params["id"]]
        if "school.state" in params:
            results = [r for r in results if r["school.state"] == params["school.state"]]
        if "school.name" in params:
            name = params["school.name"]
            if name.startswith("~"):
                results = [r for r in results if name[1:].lower() in r["school.name"].lower()]
            else:
                results = [r for r in results if r["school.name"] == name]
        if params.get("sort") == "school.name:asc":
            results.sort(key=lambda r: r["school.name"])

        per_page = int(params.get("per_page", "20"))
        fields = params.get("fields", "").split(",")
        return httpx.Response(
            200,
            json={
                "metadata": {"total": len(results), "page": 0, "per_page": per_page},
                "results": [{k: r.get(k) for k in fields} for r in results[:per_page]],
            },
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def fake_scorecard(georgia_tech, emory, umd) -> FakeScorecard:
    return FakeScorecard([georgia_tech, emory, umd])


@pytest.fixture
def scorecard_client(fake_scorecard: FakeScorecard) -> ScorecardClient:
    return ScorecardClient(
        base_url=TEST_API_BASE,
        api_key="test-key",
        timeout=2.0,
        transport=httpx.MockTransport(fake_scorecard),
    )


@pytest.fixture
def test_settings() -> Settings:
    return Settings(datagov_api_key="test-key", scorecard_api_base=TEST_API_BASE, _env_file=None)


@pytest.fixture
def client(test_settings: Settings, scorecard_client: ScorecardClient) -> TestClient:
    """Create FastAPI test client backed by the fake Scorecard"""
    app = create_app(test_settings, scorecard_client=scorecard_client, query_cache=QueryCache(ttl_seconds=60))
    return TestClient(app)
