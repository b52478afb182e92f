from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DailyStatus:
    success: bool
    present: bool = False
    count: int = 0
    csv_date: str | None = None
    today: str | None = None
    expires_at: str | None = None
    data_version: str | None = None

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "DailyStatus":
        """Parse the daily-status response body. The version token is kept opaque."""
        data = payload.get("data") or {}
        if not isinstance(data, dict):
            data = {}
        # Some deployments nest the day info one level deeper.
        inner = data.get("data") if isinstance(data.get("data"), dict) else data

        raw_version = payload.get("dataVersion")
        data_version = None if raw_version in (None, "") else str(raw_version)

        try:
            count = int(inner.get("count") or 0)
        except (TypeError, ValueError):
            count = 0

        return DailyStatus(
            success=bool(payload.get("success")),
            present=bool(inner.get("present")),
            count=count,
            csv_date=data.get("csvDate"),
            today=data.get("today"),
            expires_at=data.get("expiresAt") or inner.get("expiresAt"),
            data_version=data_version,
        )
