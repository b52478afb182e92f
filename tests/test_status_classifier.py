"""
Tests for mapping raw status codes and elapsed time onto display states.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from foodbank_dashboard.application.utils.status_classifier import classify_status, describe_status
from foodbank_dashboard.domain.entities.display_state import DisplayState

TZ = ZoneInfo("America/Vancouver")
NOW = datetime(2025, 10, 20, 14, 0, tzinfo=TZ)


def test_terminal_codes_ignore_time():
    long_ago = NOW - timedelta(hours=10)
    assert classify_status("Collected", long_ago, NOW) is DisplayState.COMPLETED
    assert classify_status("Shipped", long_ago, NOW) is DisplayState.COMPLETED
    assert classify_status("Not Collected", NOW, NOW) is DisplayState.MISSED
    assert classify_status("No Show", NOW, NOW) is DisplayState.MISSED
    assert classify_status("Cancelled", long_ago, NOW) is DisplayState.CANCELLED


def test_unknown_or_missing_codes_fall_into_cancelled():
    for raw in ("Booked", "???", "", None):
        assert classify_status(raw, NOW, NOW) is DisplayState.CANCELLED, raw


def test_codes_are_matched_case_insensitively():
    assert classify_status("  collected ", NOW, NOW) is DisplayState.COMPLETED
    assert classify_status("NOT  COLLECTED", NOW, NOW) is DisplayState.MISSED


def test_open_escalation_boundaries():
    """Late starts at exactly 1h, Missed at exactly 4h."""
    cases = [
        (timedelta(minutes=59, seconds=59), DisplayState.PENDING),
        (timedelta(hours=1), DisplayState.LATE),
        (timedelta(hours=1, seconds=1), DisplayState.LATE),
        (timedelta(hours=3, minutes=59, seconds=59), DisplayState.LATE),
        (timedelta(hours=4), DisplayState.MISSED),
        (timedelta(hours=9), DisplayState.MISSED),
        (timedelta(hours=-2), DisplayState.PENDING),
    ]
    for elapsed, expected in cases:
        for raw in ("Pending", "Rescheduled"):
            assert classify_status(raw, NOW - elapsed, NOW) is expected, (raw, elapsed)


def test_open_without_time_stays_pending():
    assert classify_status("Pending", None, NOW) is DisplayState.PENDING


def test_custom_thresholds():
    resolved = NOW - timedelta(minutes=45)
    assert classify_status("Pending", resolved, NOW, late_after_hours=0.5) is DisplayState.LATE
    assert classify_status("Pending", resolved, NOW, late_after_hours=0.25, missed_after_hours=0.5) is DisplayState.MISSED


def test_reclassifies_when_now_advances():
    resolved = NOW - timedelta(minutes=30)
    assert classify_status("Pending", resolved, NOW) is DisplayState.PENDING
    assert classify_status("Pending", resolved, NOW + timedelta(hours=1)) is DisplayState.LATE
    assert classify_status("Pending", resolved, NOW + timedelta(hours=4)) is DisplayState.MISSED


def test_describe_status_labels():
    assert describe_status(DisplayState.LATE, NOW - timedelta(hours=1, minutes=5), NOW) == "Late by 1h 5m"
    assert describe_status(DisplayState.LATE, NOW - timedelta(hours=2), NOW) == "Late by 2h"
    assert describe_status(DisplayState.PENDING, NOW, NOW) == "Pending"
    assert describe_status(DisplayState.MISSED, None, NOW) == "Missed"


def test_elapsed_time_is_real_time_across_fall_back():
    """00:30 PDT to 03:45 PST on the fall-back night is 4h15m, not 3h15m."""
    resolved = datetime.fromisoformat("2025-11-02T07:30:00+00:00").astimezone(TZ)
    now = datetime.fromisoformat("2025-11-02T11:45:00+00:00").astimezone(TZ)

    assert classify_status("Pending", resolved, now) is DisplayState.MISSED


def test_elapsed_time_is_real_time_across_spring_forward():
    """01:30 PST to 03:10 PDT on the spring-forward night is 40m, still Pending."""
    resolved = datetime.fromisoformat("2025-03-09T09:30:00+00:00").astimezone(TZ)
    now = datetime.fromisoformat("2025-03-09T10:10:00+00:00").astimezone(TZ)

    assert classify_status("Pending", resolved, now) is DisplayState.PENDING


def test_late_label_uses_real_elapsed_time_across_fall_back():
    resolved = datetime.fromisoformat("2025-11-02T08:30:00+00:00").astimezone(TZ)
    now = datetime.fromisoformat("2025-11-02T10:00:00+00:00").astimezone(TZ)

    state = classify_status("Pending", resolved, now)

    assert state is DisplayState.LATE
    assert describe_status(state, resolved, now) == "Late by 1h 30m"
