from __future__ import annotations

from dataclasses import dataclass

from foodbank_dashboard.domain.entities.display_state import DisplayState


@dataclass(frozen=True)
class TimeSlot:
    hour: int
    minute: int
    completed: int = 0
    pending: int = 0
    late: int = 0
    missed: int = 0
    cancelled: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.pending + self.late + self.missed + self.cancelled

    @property
    def time(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    @property
    def time_label(self) -> str:
        display_hour = 12 if self.hour % 12 == 0 else self.hour % 12
        am_pm = "AM" if self.hour < 12 else "PM"
        return f"{display_hour}:{self.minute:02d} {am_pm}"

    def count(self, state: DisplayState) -> int:
        return getattr(self, state.name.lower())
