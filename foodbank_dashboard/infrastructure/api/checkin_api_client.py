from __future__ import annotations

import logging
from typing import Any

import httpx

from foodbank_dashboard.application.exceptions import RateLimitedError, UpstreamError
from foodbank_dashboard.application.ports.checkin_source import CheckInSourcePort
from foodbank_dashboard.core.config import settings
from foodbank_dashboard.domain.entities.appointment_record import AppointmentRecord
from foodbank_dashboard.domain.entities.daily_status import DailyStatus


class CheckInApiClient(CheckInSourcePort):
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or settings.CHECKIN_API_BASE_URL or "").rstrip("/")
        self._token = token if token is not None else settings.CHECKIN_API_TOKEN
        self._client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("CHECKIN_API_BASE_URL is required for the check-in API client")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _get_json(self, path: str) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            resp = await self._client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            raise UpstreamError(f"GET {path} failed: {e}") from e

        if resp.status_code == 429:
            raise RateLimitedError(f"GET {path} rate limited")
        if resp.status_code >= 400:
            self._logger.error(
                "Check-in API request failed",
                extra={"status_code": resp.status_code, "reason": path},
            )
            raise UpstreamError(f"GET {path} returned {resp.status_code}")

        try:
            body = resp.json()
        except ValueError as e:
            raise UpstreamError(f"GET {path} returned invalid JSON") from e
        if not isinstance(body, dict):
            raise UpstreamError(f"GET {path} returned an unexpected payload")
        return body

    async def fetch_appointments(self) -> list[AppointmentRecord]:
        body = await self._get_json("/checkin/appointments")
        rows = body.get("data")
        if not body.get("success") or not isinstance(rows, list):
            self._logger.info("Appointment listing not successful, treating as empty")
            return []
        return [AppointmentRecord.from_payload(row) for row in rows if isinstance(row, dict)]

    async def fetch_daily_status(self) -> DailyStatus:
        body = await self._get_json("/status/day")
        return DailyStatus.from_payload(body)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()
