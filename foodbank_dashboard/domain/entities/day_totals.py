from dataclasses import dataclass

from foodbank_dashboard.domain.entities.display_state import DisplayState


@dataclass(frozen=True)
class DayTotals:
    completed: int = 0
    pending: int = 0
    late: int = 0
    missed: int = 0
    cancelled: int = 0
    unresolved: int = 0  # records dropped because no time could be resolved

    @property
    def total(self) -> int:
        return self.completed + self.pending + self.late + self.missed + self.cancelled

    def count(self, state: DisplayState) -> int:
        return getattr(self, state.name.lower())

    @property
    def completion_rate(self) -> int:
        """Whole-number percentage of the day's records that are Completed."""
        if not self.total:
            return 0
        return int(self.completed / self.total * 100 + 0.5)
