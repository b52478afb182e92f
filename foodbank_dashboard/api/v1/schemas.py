from datetime import date, datetime

from pydantic import BaseModel

from foodbank_dashboard.domain.entities.dashboard_snapshot import DashboardSnapshot
from foodbank_dashboard.domain.entities.day_totals import DayTotals
from foodbank_dashboard.domain.entities.display_state import DisplayState
from foodbank_dashboard.domain.entities.resolved_appointment import ResolvedAppointment
from foodbank_dashboard.domain.entities.time_slot import TimeSlot


class TimeSlotSchema(BaseModel):
    time: str
    time_label: str
    hour: int
    minute: int
    completed: int
    pending: int
    late: int
    missed: int
    cancelled: int
    total: int

    @staticmethod
    def from_entity(slot: TimeSlot) -> "TimeSlotSchema":
        return TimeSlotSchema(
            time=slot.time,
            time_label=slot.time_label,
            hour=slot.hour,
            minute=slot.minute,
            completed=slot.completed,
            pending=slot.pending,
            late=slot.late,
            missed=slot.missed,
            cancelled=slot.cancelled,
            total=slot.total,
        )


class DayTotalsSchema(BaseModel):
    completed: int
    pending: int
    late: int
    missed: int
    cancelled: int
    total: int
    unresolved: int
    completion_rate: int

    @staticmethod
    def from_entity(totals: DayTotals) -> "DayTotalsSchema":
        return DayTotalsSchema(
            completed=totals.completed,
            pending=totals.pending,
            late=totals.late,
            missed=totals.missed,
            cancelled=totals.cancelled,
            total=totals.total,
            unresolved=totals.unresolved,
            completion_rate=totals.completion_rate,
        )


class DashboardResponseSchema(BaseModel):
    reference_date: date
    generated_at: datetime
    data_generation: int
    slots: list[TimeSlotSchema]
    totals: DayTotalsSchema
    peak_slot: TimeSlotSchema | None = None

    @staticmethod
    def from_snapshot(snapshot: DashboardSnapshot) -> "DashboardResponseSchema":
        peak = snapshot.peak_slot
        return DashboardResponseSchema(
            reference_date=snapshot.reference_date,
            generated_at=snapshot.generated_at,
            data_generation=snapshot.data_generation,
            slots=[TimeSlotSchema.from_entity(s) for s in snapshot.slots],
            totals=DayTotalsSchema.from_entity(snapshot.totals),
            peak_slot=TimeSlotSchema.from_entity(peak) if peak else None,
        )


class AppointmentRowSchema(BaseModel):
    id: str | None = None
    client_name: str | None = None
    status: str | None = None
    resolved_at: datetime | None = None
    state: DisplayState | None = None
    label: str | None = None

    @staticmethod
    def from_entity(appt: ResolvedAppointment) -> "AppointmentRowSchema":
        return AppointmentRowSchema(
            id=appt.record.id,
            client_name=appt.record.client_name,
            status=appt.record.status,
            resolved_at=appt.resolved_at,
            state=appt.state,
            label=appt.label,
        )


class AppointmentListResponseSchema(BaseModel):
    reference_date: date
    data_generation: int
    appointments: list[AppointmentRowSchema]


class VisibilityRequestSchema(BaseModel):
    visible: bool


class VersionResponseSchema(BaseModel):
    data_version: str | None = None
    data_generation: int
    polling: bool
    visible: bool
