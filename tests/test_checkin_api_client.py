"""
Tests for the httpx adapter that talks to the check-in API.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from foodbank_dashboard.application.exceptions import RateLimitedError, UpstreamError
from foodbank_dashboard.infrastructure.api.checkin_api_client import CheckInApiClient


def _client(handler) -> CheckInApiClient:
    return CheckInApiClient(
        base_url="https://api.example.test/api/",
        token="secret",
        timeout=2.0,
        transport=httpx.MockTransport(handler),
    )


def test_fetch_appointments_parses_rows_and_sends_token():
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization", "")
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": [
                    {"id": "1", "clientName": "A", "status": "Pending", "pickUpTime": "09:00"},
                    "not a row",
                ],
            },
        )

    records = asyncio.run(_client(handler).fetch_appointments())

    assert seen["url"] == "https://api.example.test/api/checkin/appointments"
    assert seen["auth"] == "Bearer secret"
    assert len(records) == 1
    assert records[0].status == "Pending"
    assert records[0].pickup_time == "09:00"


def test_unsuccessful_listing_is_zero_records():
    for body in ({"success": False, "error": "nope"}, {"success": True}, {"success": True, "data": {"x": 1}}):
        client = _client(lambda request, body=body: httpx.Response(200, json=body))
        assert asyncio.run(client.fetch_appointments()) == []


def test_daily_status_parses_version_token():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/status/day"
        return httpx.Response(
            200,
            json={
                "success": True,
                "data": {"today": "2025-10-20", "csvDate": "2025-10-20", "data": {"present": True, "count": 12}},
                "dataVersion": 3,
            },
        )

    status = asyncio.run(_client(handler).fetch_daily_status())

    assert status.success is True
    assert status.present is True
    assert status.count == 12
    assert status.today == "2025-10-20"
    assert status.data_version == "3"


def test_rate_limit_raises_dedicated_error():
    client = _client(lambda request: httpx.Response(429))

    with pytest.raises(RateLimitedError):
        asyncio.run(client.fetch_daily_status())


def test_server_error_and_timeout_raise_upstream_error():
    def timeout_handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamError):
        asyncio.run(_client(lambda request: httpx.Response(500)).fetch_daily_status())
    with pytest.raises(UpstreamError):
        asyncio.run(_client(timeout_handler).fetch_daily_status())
    with pytest.raises(UpstreamError):
        asyncio.run(_client(lambda request: httpx.Response(200, text="<html>")).fetch_appointments())


def test_rate_limited_is_an_upstream_error():
    assert issubclass(RateLimitedError, UpstreamError)


def test_base_url_is_required():
    with pytest.raises(ValueError):
        CheckInApiClient(base_url="", transport=httpx.MockTransport(lambda request: httpx.Response(200)))
