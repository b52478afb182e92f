from __future__ import annotations

import logging
from typing import Any

from foodbank_dashboard.application.ports.checkin_source import CheckInSourcePort
from foodbank_dashboard.domain.entities.appointment_record import AppointmentRecord
from foodbank_dashboard.domain.entities.daily_status import DailyStatus


class MockCheckInSource(CheckInSourcePort):
    def __init__(self, rows: list[dict[str, Any]] | None = None, data_version: str | None = "1") -> None:
        self._rows: list[dict[str, Any]] = list(rows or [])
        self._data_version = data_version
        self._logger = logging.getLogger(__name__)

    def replace_dataset(self, rows: list[dict[str, Any]], data_version: str) -> None:
        """Swap the whole day's rows at once, the way a new CSV upload does."""
        self._rows = list(rows)
        self._data_version = data_version
        self._logger.info("Mock dataset replaced", extra={"data_version": data_version, "record_count": len(rows)})

    async def fetch_appointments(self) -> list[AppointmentRecord]:
        return [AppointmentRecord.from_payload(row) for row in self._rows]

    async def fetch_daily_status(self) -> DailyStatus:
        return DailyStatus(
            success=True,
            present=bool(self._rows),
            count=len(self._rows),
            data_version=self._data_version,
        )
