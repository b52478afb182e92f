from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from foodbank_dashboard.domain.entities.appointment_record import AppointmentRecord

BARE_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


def parse_instant(value: datetime | int | float | str | None, timezone: ZoneInfo) -> datetime | None:
    """Parse a timestamp-like value into an aware datetime in ``timezone``.

    Accepts datetimes, epoch milliseconds and ISO 8601 strings (a trailing ``Z`` is
    allowed). Naive values are taken to be local service time. Returns None instead
    of raising when the value is not a valid instant.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000, timezone)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone)
    return parsed.astimezone(timezone)


def parse_bare_time(value: str | None) -> time | None:
    """Parse a strict ``HH:MM`` local clock string."""
    if not value:
        return None
    match = BARE_TIME_PATTERN.match(value.strip())
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return time(hour, minute)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def resolve_appointment_time(
    record: AppointmentRecord,
    reference_date: date,
    timezone: ZoneInfo,
) -> datetime | None:
    """Return the single authoritative appointment time for a record, or None.

    Candidates are tried in a fixed order and the first valid one wins:
    ``appointment_time``, then ``pickup_iso``, then ``pickup_time`` combined with
    the record's ``pickup_date`` (or ``reference_date`` when that is missing or
    invalid). Unparseable candidates are skipped; nothing here raises.
    """
    resolved = parse_instant(record.appointment_time, timezone)
    if resolved is not None:
        return resolved

    resolved = parse_instant(record.pickup_iso, timezone)
    if resolved is not None:
        return resolved

    clock = parse_bare_time(record.pickup_time)
    if clock is None:
        return None
    day = _parse_date(record.pickup_date) or reference_date
    return datetime.combine(day, clock, tzinfo=timezone)
