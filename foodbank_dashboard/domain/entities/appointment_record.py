from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return str(value)


@dataclass(frozen=True)
class AppointmentRecord:
    id: str | None = None
    client_name: str | None = None
    status: str | None = None  # raw upstream code, e.g. "Pending", "Collected"
    appointment_time: datetime | int | float | str | None = None  # full timestamp, wins over the others
    pickup_iso: str | None = None  # timezone-qualified ISO string
    pickup_time: str | None = None  # bare "HH:MM" local clock
    pickup_date: str | None = None  # "YYYY-MM-DD", only used together with pickup_time

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "AppointmentRecord":
        """Build a record from an API row, tolerating missing or oddly typed fields."""
        appointment_time = payload.get("appointmentTime")
        if not isinstance(appointment_time, (datetime, int, float)) or isinstance(appointment_time, bool):
            appointment_time = _text(appointment_time)

        return AppointmentRecord(
            id=_text(payload.get("id")),
            client_name=_text(payload.get("clientName") or payload.get("name")),
            status=_text(payload.get("status")),
            appointment_time=appointment_time,
            pickup_iso=_text(payload.get("pickUpISO")),
            pickup_time=_text(payload.get("pickUpTime")),
            pickup_date=_text(payload.get("pickUpDate")),
        )
