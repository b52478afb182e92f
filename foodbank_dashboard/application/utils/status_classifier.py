from __future__ import annotations

from datetime import datetime

from foodbank_dashboard.domain.entities.display_state import DisplayState

FULFILLED_CODES = {"collected", "shipped"}
ABANDONED_CODES = {"not collected", "no show"}
CANCELLED_CODES = {"cancelled"}
OPEN_CODES = {"pending", "rescheduled"}

LATE_AFTER_HOURS = 1.0
MISSED_AFTER_HOURS = 4.0


def _normalize_code(raw_status: str | None) -> str:
    return " ".join((raw_status or "").split()).lower()


def is_open_status(raw_status: str | None) -> bool:
    return _normalize_code(raw_status) in OPEN_CODES


def seconds_elapsed(resolved_at: datetime, now: datetime) -> float:
    # Aware datetimes sharing a ZoneInfo subtract by wall clock; compare instants instead.
    return now.timestamp() - resolved_at.timestamp()


def hours_elapsed(resolved_at: datetime, now: datetime) -> float:
    return seconds_elapsed(resolved_at, now) / 3600


def classify_status(
    raw_status: str | None,
    resolved_at: datetime | None,
    now: datetime,
    late_after_hours: float = LATE_AFTER_HOURS,
    missed_after_hours: float = MISSED_AFTER_HOURS,
) -> DisplayState:
    """Map a raw status code plus elapsed time onto exactly one DisplayState.

    Open appointments escalate on their own: 1h past the slot is Late, 4h past is
    Missed, both thresholds inclusive. Unknown codes fall into Cancelled.
    """
    code = _normalize_code(raw_status)

    if code in FULFILLED_CODES:
        return DisplayState.COMPLETED
    if code in ABANDONED_CODES:
        return DisplayState.MISSED
    if code in CANCELLED_CODES or code not in OPEN_CODES:
        return DisplayState.CANCELLED

    if resolved_at is None:
        return DisplayState.PENDING

    elapsed = hours_elapsed(resolved_at, now)
    if elapsed >= missed_after_hours:
        return DisplayState.MISSED
    if elapsed >= late_after_hours:
        return DisplayState.LATE
    return DisplayState.PENDING


def describe_status(state: DisplayState, resolved_at: datetime | None, now: datetime) -> str:
    """Human label for record tables, e.g. ``Late by 1h 5m``."""
    if state is DisplayState.LATE and resolved_at is not None:
        total_minutes = int(seconds_elapsed(resolved_at, now) // 60)
        hours, minutes = divmod(total_minutes, 60)
        if minutes > 0:
            return f"Late by {hours}h {minutes}m"
        return f"Late by {hours}h"
    return state.value
