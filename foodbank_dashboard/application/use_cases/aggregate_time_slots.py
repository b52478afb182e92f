from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable

from foodbank_dashboard.domain.entities.day_totals import DayTotals
from foodbank_dashboard.domain.entities.display_state import DisplayState
from foodbank_dashboard.domain.entities.resolved_appointment import ResolvedAppointment
from foodbank_dashboard.domain.entities.time_slot import TimeSlot


class TimeBucketAggregator:
    """Buckets classified appointments into fixed slots across the operating window.

    The window is inclusive at both ends, so the defaults (08:00 to 20:00 every 15
    minutes) always produce 49 slots. A record lands in a slot only when its
    hour and minute match exactly; off-grid times still count toward day totals.
    """

    def __init__(self, start_hour: int = 8, end_hour: int = 20, slot_minutes: int = 15) -> None:
        if slot_minutes <= 0:
            raise ValueError("slot_minutes must be positive")
        if not (0 <= start_hour <= end_hour <= 23):
            raise ValueError("operating window must satisfy 0 <= start_hour <= end_hour <= 23")
        self._start_hour = start_hour
        self._end_hour = end_hour
        self._slot_minutes = slot_minutes

    def slot_times(self) -> list[tuple[int, int]]:
        first = self._start_hour * 60
        last = self._end_hour * 60
        return [divmod(offset, 60) for offset in range(first, last + 1, self._slot_minutes)]

    def build_time_slots(
        self,
        reference_date: date,
        appointments: Iterable[ResolvedAppointment],
    ) -> tuple[TimeSlot, ...]:
        counts: Counter[tuple[int, int, DisplayState]] = Counter()
        for appt in appointments:
            if appt.resolved_at is None or appt.state is None:
                continue
            if appt.resolved_at.date() != reference_date:
                continue
            counts[(appt.resolved_at.hour, appt.resolved_at.minute, appt.state)] += 1

        slots: list[TimeSlot] = []
        for hour, minute in self.slot_times():
            slots.append(
                TimeSlot(
                    hour=hour,
                    minute=minute,
                    completed=counts[(hour, minute, DisplayState.COMPLETED)],
                    pending=counts[(hour, minute, DisplayState.PENDING)],
                    late=counts[(hour, minute, DisplayState.LATE)],
                    missed=counts[(hour, minute, DisplayState.MISSED)],
                    cancelled=counts[(hour, minute, DisplayState.CANCELLED)],
                )
            )
        return tuple(slots)

    def compute_day_totals(
        self,
        reference_date: date,
        appointments: Iterable[ResolvedAppointment],
    ) -> DayTotals:
        counts: Counter[DisplayState] = Counter()
        unresolved = 0
        for appt in appointments:
            if appt.resolved_at is None:
                unresolved += 1
                continue
            if appt.state is None or appt.resolved_at.date() != reference_date:
                continue
            counts[appt.state] += 1

        return DayTotals(
            completed=counts[DisplayState.COMPLETED],
            pending=counts[DisplayState.PENDING],
            late=counts[DisplayState.LATE],
            missed=counts[DisplayState.MISSED],
            cancelled=counts[DisplayState.CANCELLED],
            unresolved=unresolved,
        )

    def aggregate(
        self,
        reference_date: date,
        appointments: Iterable[ResolvedAppointment],
    ) -> tuple[tuple[TimeSlot, ...], DayTotals]:
        items = list(appointments)
        return self.build_time_slots(reference_date, items), self.compute_day_totals(reference_date, items)
