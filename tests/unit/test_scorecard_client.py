"""Unit tests for the College Scorecard HTTP client"""

import httpx
import pytest
from scorecard_gateway.infrastructure.clients.scorecard import ScorecardClient
from scorecard_gateway.domain.exceptions import ConfigError, NotFoundError, RecordParseError, UpstreamError
from scorecard_gateway.domain.models import IncomeBracket, Sector


def client_for(handler, api_key="test-key") -> ScorecardClient:
    return ScorecardClient(
        base_url="https://scorecard.test/v1/schools",
        api_key=api_key,
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


async def test_query_sends_key_fields_and_filters(scorecard_client, fake_scorecard):
    page = await scorecard_client.query(
        ["id", "school.name"], {"school.state": "GA"}, per_page=5, sort="school.name:asc"
    )

    params = fake_scorecard.requests[0].url.params
    assert params["api_key"] == "test-key"
    assert params["fields"] == "id,school.name"
    assert params["per_page"] == "5"
    assert params["school.state"] == "GA"
    assert "page" not in params
    assert [r["school.name"] for r in page["results"]] == [
        "Emory University",
        "Georgia Institute of Technology-Main Campus",
    ]


async def test_missing_api_key_fails_before_any_request(fake_scorecard):
    client = client_for(fake_scorecard, api_key="")

    with pytest.raises(ConfigError):
        await client.query(["id"])

    assert fake_scorecard.call_count == 0
    assert client.configured is False


async def test_non_success_status_raises_upstream_error(scorecard_client, fake_scorecard):
    fake_scorecard.status_code = 403
    fake_scorecard.error_text = '{"error": {"code": "API_KEY_INVALID"}}'

    with pytest.raises(UpstreamError) as exc_info:
        await scorecard_client.query(["id"])

    assert exc_info.value.status == 403
    assert exc_info.value.detail == '{"error": {"code": "API_KEY_INVALID"}}'


async def test_timeout_raises_upstream_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamError) as exc_info:
        await client_for(handler).query(["id"])

    assert exc_info.value.status == 504


async def test_invalid_json_raises_upstream_error():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(UpstreamError) as exc_info:
        await client_for(handler).query(["id"])

    assert exc_info.value.status == 502


async def test_non_object_page_is_a_parse_error():
    def handler(request):
        return httpx.Response(200, json=[1, 2, 3])

    with pytest.raises(RecordParseError):
        await client_for(handler).query(["id"])


async def test_connection_error_propagates():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        await client_for(handler).query(["id"])


async def test_get_school_parses_record(scorecard_client, fake_scorecard):
    record = await scorecard_client.get_school(139658)

    assert record.name == "Emory University"
    assert record.net_price(Sector.PRIVATE, IncomeBracket.UP_TO_75K) == 17600
    params = fake_scorecard.requests[0].url.params
    assert params["id"] == "139658"
    assert params["per_page"] == "1"
    assert "latest.cost.net_price.public.by_income_level.0-30000" in params["fields"]


async def test_get_school_not_found(scorecard_client):
    with pytest.raises(NotFoundError):
        await scorecard_client.get_school(999999)
