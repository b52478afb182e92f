"""
Tests for the dashboard HTTP endpoints.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi.testclient import TestClient

from foodbank_dashboard.application.exceptions import UpstreamError
from foodbank_dashboard.application.ports.checkin_source import AppointmentSourcePort
from foodbank_dashboard.application.use_cases.aggregate_time_slots import TimeBucketAggregator
from foodbank_dashboard.application.use_cases.build_dashboard import BuildDashboardUseCase
from foodbank_dashboard.application.use_cases.data_version_guard import DataVersionGuard
from foodbank_dashboard.core.config import settings
from foodbank_dashboard.infrastructure.api.checkin_api_client import CheckInApiClient
from foodbank_dashboard.infrastructure.api.mock_checkin_source import MockCheckInSource
from foodbank_dashboard.infrastructure.cache.record_set_cache import RecordSetCache
from foodbank_dashboard.infrastructure.store.memory_store import MemoryKeyValueStore
from foodbank_dashboard.main import app
from foodbank_dashboard.wiring.dependencies import (
    get_build_dashboard_use_case,
    get_checkin_source,
    get_record_cache,
    get_version_guard,
)

TZ = ZoneInfo("America/Vancouver")


class FrozenDashboard(BuildDashboardUseCase):
    """Pins ``now`` so responses are deterministic."""

    def __init__(self, source: AppointmentSourcePort, now: datetime) -> None:
        super().__init__(source=source, aggregator=TimeBucketAggregator(), timezone=TZ)
        self._now = now

    async def execute(self, now=None, reference_date=None):
        return await super().execute(now=self._now, reference_date=reference_date)


class FailingSource(AppointmentSourcePort):
    async def fetch_appointments(self):
        raise UpstreamError("down")


ROWS = [
    {"id": "1", "clientName": "A", "status": "Pending", "appointmentTime": "2025-10-20T09:00:00"},
    {"id": "2", "clientName": "B", "status": "Collected", "pickUpTime": "09:00"},
    {"id": "3", "clientName": "C", "status": "Pending", "pickUpTime": "09:07"},
    {"id": "4", "clientName": "D", "status": "Pending"},
]


def _override(source: AppointmentSourcePort) -> TestClient:
    now = datetime(2025, 10, 20, 10, 5, tzinfo=TZ)
    app.dependency_overrides[get_build_dashboard_use_case] = lambda: FrozenDashboard(source, now)
    return TestClient(app)


def test_health():
    client = TestClient(app)
    assert client.get("/health").json() == {"status": "ok"}


def test_dashboard_snapshot():
    client = _override(MockCheckInSource(rows=ROWS))
    try:
        resp = client.get("/api/v1/dashboard")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 200
    body = resp.json()
    assert body["reference_date"] == "2025-10-20"
    assert len(body["slots"]) == 49
    nine = next(s for s in body["slots"] if s["time"] == "09:00")
    assert nine["late"] == 1
    assert nine["completed"] == 1
    assert nine["total"] == 2
    assert body["totals"]["total"] == 3
    assert body["totals"]["pending"] == 1
    assert body["totals"]["unresolved"] == 1
    assert body["totals"]["completion_rate"] == 33
    assert body["peak_slot"]["time"] == "09:00"


def test_appointment_rows_include_unresolved_records():
    client = _override(MockCheckInSource(rows=ROWS))
    try:
        resp = client.get("/api/v1/dashboard/appointments")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 200
    rows = {r["id"]: r for r in resp.json()["appointments"]}
    assert rows["1"]["state"] == "Late"
    assert rows["1"]["label"] == "Late by 1h 5m"
    assert rows["2"]["state"] == "Completed"
    assert rows["4"]["state"] is None
    assert rows["4"]["resolved_at"] is None


def test_upstream_failure_is_bad_gateway():
    client = _override(FailingSource())
    try:
        resp = client.get("/api/v1/dashboard")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 502


def test_visibility_and_version_endpoints():
    source = MockCheckInSource(rows=ROWS, data_version="5")
    cache = RecordSetCache(source=source)
    guard = DataVersionGuard(source=source, store=MemoryKeyValueStore({"dataVersion": "5"}), reload_trigger=cache)
    app.dependency_overrides[get_version_guard] = lambda: guard
    app.dependency_overrides[get_record_cache] = lambda: cache
    client = TestClient(app)
    try:
        version = client.get("/api/v1/dashboard/version").json()
        hidden = client.post("/api/v1/dashboard/visibility", json={"visible": False}).json()
    finally:
        app.dependency_overrides.clear()

    assert version == {"data_version": "5", "data_generation": 0, "polling": False, "visible": True}
    assert hidden["visible"] is False
    assert hidden["polling"] is False


def test_shutdown_closes_the_api_client(monkeypatch):
    """Leaving the app lifespan releases the cached httpx client."""
    monkeypatch.setattr(settings, "CHECKIN_API_BASE_URL", "https://api.example.test/api")
    monkeypatch.setattr(settings, "VERSION_GUARD_ENABLED", False)
    get_checkin_source.cache_clear()
    source = get_checkin_source()
    assert isinstance(source, CheckInApiClient)

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert source.is_closed is False

    assert source.is_closed is True
    assert get_checkin_source.cache_info().currsize == 0
