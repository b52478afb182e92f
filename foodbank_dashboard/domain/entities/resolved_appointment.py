from dataclasses import dataclass
from datetime import datetime

from foodbank_dashboard.domain.entities.appointment_record import AppointmentRecord
from foodbank_dashboard.domain.entities.display_state import DisplayState


@dataclass(frozen=True)
class ResolvedAppointment:
    record: AppointmentRecord
    resolved_at: datetime | None = None  # None marks an unresolvable record
    state: DisplayState | None = None
    label: str | None = None

    @property
    def is_resolved(self) -> bool:
        return self.resolved_at is not None
