"""
Unit tests for the Hostaway API client.

Requests are served by httpx.MockTransport; no network access.
"""

import asyncio

import httpx
import pytest

import config.settings as settings
from reviewlens.agents.mapping import RecordMapper
from reviewlens.models.review import ReviewQuery
from reviewlens.utils.hostaway_client import (
    HostawayClient,
    UpstreamError,
    UpstreamNotConfiguredError,
    extract_items,
    mask_secret,
)


def _client(handler, **overrides):
    options = {
        "account_id": "61148",
        "api_key": "secret-api-key-1234",
        "base_url": "https://api.hostaway.test",
        "reviews_endpoint": "/v1/reviews",
        "transport": httpx.MockTransport(handler),
    }
    options.update(overrides)
    return HostawayClient(**options)


@pytest.mark.parametrize("base_url, endpoint, expected", [
    ("https://api.hostaway.com", "/v1/reviews", "https://api.hostaway.com/v1/reviews"),
    ("https://api.hostaway.com/", "/v1/reviews", "https://api.hostaway.com/v1/reviews"),
    ("https://api.hostaway.com", "v1/reviews", "https://api.hostaway.com/v1/reviews"),
    ("https://api.hostaway.com", "https://proxy.test/reviews", "https://proxy.test/reviews"),
])
def test_build_request_url(base_url, endpoint, expected):
    client = HostawayClient("1", "key", base_url=base_url, reviews_endpoint=endpoint)
    assert client.build_request_url() == expected


def test_build_params_includes_only_given_criteria():
    client = HostawayClient("61148", "key")

    params = client.build_params(ReviewQuery(start_date="2024-01-01", listing_id=101))

    assert params == {"accountId": "61148", "startDate": "2024-01-01", "listingId": "101"}


def test_fetch_sends_credentials_and_query():
    seen = {}

    def handler(request):
        seen["request"] = request
        return httpx.Response(200, json={"status": "success", "result": []})

    client = _client(handler)
    asyncio.run(client.fetch_reviews(ReviewQuery(channel="airbnb", end_date="2024-12-31")))

    request = seen["request"]
    assert request.url.path == "/v1/reviews"
    assert request.url.params["accountId"] == "61148"
    assert request.url.params["channel"] == "airbnb"
    assert request.url.params["endDate"] == "2024-12-31"
    assert "startDate" not in request.url.params
    assert request.headers["Authorization"] == "Bearer secret-api-key-1234"
    assert request.headers["X-Hostaway-API-Key"] == "secret-api-key-1234"
    assert request.headers["X-Hostaway-Account-Id"] == "61148"
    assert request.headers["Accept"] == "application/json"


def test_fetch_maps_items(fixed_clock):
    payload = {
        "status": "success",
        "result": [
            {"id": 1, "listingId": 101, "rating": 9, "submittedAt": "2024-08-21 22:45:14"},
            {"id": 2, "rating": 7},
            {"review_id": "3", "listing": {"id": "202", "name": "Camden"}, "score": "8.5"},
        ],
    }
    client = _client(
        lambda request: httpx.Response(200, json=payload),
        mapper=RecordMapper(clock=fixed_clock),
    )

    batch = asyncio.run(client.fetch_reviews())

    assert [r.id for r in batch.reviews] == [1, 3]
    assert batch.dropped_records == 1
    assert batch.reviews[1].listing_name == "Camden"
    assert batch.reviews[1].rating == 8.5
    assert batch.reviews[1].submitted_at == "2025-01-02T03:04:05.000Z"


def test_fetch_without_item_array_returns_empty_batch():
    client = _client(lambda request: httpx.Response(200, json={"status": "success"}))

    batch = asyncio.run(client.fetch_reviews())

    assert batch.reviews == []
    assert batch.dropped_records == 0


def test_missing_credentials_raise_before_request():
    def handler(request):
        raise AssertionError("no request expected")

    client = _client(handler, api_key="")

    with pytest.raises(UpstreamNotConfiguredError, match="not configured"):
        asyncio.run(client.fetch_reviews())


def test_http_error_status_raises():
    client = _client(lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(UpstreamError, match="status 503"):
        asyncio.run(client.fetch_reviews())


def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(UpstreamError, match="connection refused"):
        asyncio.run(client.fetch_reviews())


def test_invalid_json_raises():
    client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

    with pytest.raises(UpstreamError, match="invalid JSON"):
        asyncio.run(client.fetch_reviews())


@pytest.mark.parametrize("payload, expected", [
    ({"result": [1], "results": [2]}, [1]),
    ({"result": None, "results": [2]}, [2]),
    ({"data": [3], "items": [4]}, [3]),
    ({"items": [4]}, [4]),
    ({"result": {"id": 1}}, []),
    ([{"id": 1}], []),
    (None, []),
])
def test_extract_items(payload, expected):
    assert extract_items(payload) == expected


def test_mask_secret():
    assert mask_secret("secret-api-key-1234") == "secr...1234"
    assert mask_secret("short") == "*****"


def test_from_settings_uses_configuration(monkeypatch):
    monkeypatch.setattr(settings, "HOSTAWAY_ACCOUNT_ID", "42")
    monkeypatch.setattr(settings, "HOSTAWAY_API_KEY", "k")

    client = HostawayClient.from_settings()

    assert client.account_id == "42"
    assert client.is_configured


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
