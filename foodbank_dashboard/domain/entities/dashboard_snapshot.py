from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from foodbank_dashboard.domain.entities.day_totals import DayTotals
from foodbank_dashboard.domain.entities.resolved_appointment import ResolvedAppointment
from foodbank_dashboard.domain.entities.time_slot import TimeSlot


@dataclass(frozen=True)
class DashboardSnapshot:
    reference_date: date
    generated_at: datetime
    slots: tuple[TimeSlot, ...]
    totals: DayTotals
    appointments: tuple[ResolvedAppointment, ...] = ()
    data_generation: int = 0

    @property
    def peak_slot(self) -> TimeSlot | None:
        peak: TimeSlot | None = None
        for slot in self.slots:
            if slot.total and (peak is None or slot.total > peak.total):
                peak = slot
        return peak
