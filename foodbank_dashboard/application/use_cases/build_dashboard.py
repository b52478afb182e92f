from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable
from zoneinfo import ZoneInfo

from foodbank_dashboard.application.ports.checkin_source import AppointmentSourcePort
from foodbank_dashboard.application.use_cases.aggregate_time_slots import TimeBucketAggregator
from foodbank_dashboard.application.utils.date_resolver import resolve_appointment_time
from foodbank_dashboard.application.utils.status_classifier import (
    LATE_AFTER_HOURS,
    MISSED_AFTER_HOURS,
    classify_status,
    describe_status,
)
from foodbank_dashboard.domain.entities.appointment_record import AppointmentRecord
from foodbank_dashboard.domain.entities.dashboard_snapshot import DashboardSnapshot
from foodbank_dashboard.domain.entities.resolved_appointment import ResolvedAppointment


def classify_appointments(
    records: Iterable[AppointmentRecord],
    reference_date: date,
    now: datetime,
    timezone: ZoneInfo,
    late_after_hours: float = LATE_AFTER_HOURS,
    missed_after_hours: float = MISSED_AFTER_HOURS,
) -> tuple[ResolvedAppointment, ...]:
    """Resolve and classify every record against one sampled ``now``.

    Unresolvable records are kept with ``resolved_at=None`` and no state so that
    tables can still show them; the aggregator leaves them out of every count.
    """
    out: list[ResolvedAppointment] = []
    for record in records:
        resolved_at = resolve_appointment_time(record, reference_date, timezone)
        if resolved_at is None:
            out.append(ResolvedAppointment(record=record))
            continue
        state = classify_status(
            record.status,
            resolved_at,
            now,
            late_after_hours=late_after_hours,
            missed_after_hours=missed_after_hours,
        )
        out.append(
            ResolvedAppointment(
                record=record,
                resolved_at=resolved_at,
                state=state,
                label=describe_status(state, resolved_at, now),
            )
        )
    return tuple(out)


class BuildDashboardUseCase:
    def __init__(
        self,
        source: AppointmentSourcePort,
        aggregator: TimeBucketAggregator,
        timezone: ZoneInfo,
        late_after_hours: float = LATE_AFTER_HOURS,
        missed_after_hours: float = MISSED_AFTER_HOURS,
        data_generation: Callable[[], int] | None = None,
    ) -> None:
        self._source = source
        self._aggregator = aggregator
        self._timezone = timezone
        self._late_after_hours = late_after_hours
        self._missed_after_hours = missed_after_hours
        self._data_generation = data_generation or (lambda: 0)
        self._logger = logging.getLogger(__name__)

    def build(
        self,
        records: Iterable[AppointmentRecord],
        now: datetime,
        reference_date: date | None = None,
    ) -> DashboardSnapshot:
        """Run the pure part of the pipeline over an already fetched record set."""
        now = now.astimezone(self._timezone)
        reference_date = reference_date or now.date()

        appointments = classify_appointments(
            records,
            reference_date,
            now,
            self._timezone,
            late_after_hours=self._late_after_hours,
            missed_after_hours=self._missed_after_hours,
        )
        slots, totals = self._aggregator.aggregate(reference_date, appointments)

        if totals.unresolved:
            self._logger.debug(
                "Records without a resolvable time excluded from counts",
                extra={"unresolved": totals.unresolved},
            )

        return DashboardSnapshot(
            reference_date=reference_date,
            generated_at=now,
            slots=slots,
            totals=totals,
            appointments=appointments,
            data_generation=self._data_generation(),
        )

    async def execute(self, now: datetime | None = None, reference_date: date | None = None) -> DashboardSnapshot:
        records = await self._source.fetch_appointments()
        snapshot = self.build(records, now or datetime.now(self._timezone), reference_date)
        self._logger.info(
            "Dashboard snapshot built",
            extra={"record_count": len(records), "unresolved": snapshot.totals.unresolved},
        )
        return snapshot
