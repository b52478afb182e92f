from __future__ import annotations

import logging
import time
from typing import Callable

from foodbank_dashboard.application.ports.checkin_source import AppointmentSourcePort
from foodbank_dashboard.application.ports.reload_trigger import ReloadTriggerPort
from foodbank_dashboard.domain.entities.appointment_record import AppointmentRecord


class RecordSetCache(AppointmentSourcePort, ReloadTriggerPort):
    """Caches the last fetched record list and serves as the hard-reload trigger.

    ``reload()`` drops the cached list and bumps ``generation``; views compare the
    generation they rendered with the current one to know they must start over.
    Only raw records are cached, classification is recomputed on every read.
    """

    def __init__(
        self,
        source: AppointmentSourcePort,
        ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._ttl = ttl_seconds
        self._clock = clock
        self._records: list[AppointmentRecord] | None = None
        self._fetched_at: float | None = None
        self._generation = 0
        self._logger = logging.getLogger(__name__)

    @property
    def generation(self) -> int:
        return self._generation

    def _is_fresh(self) -> bool:
        if self._records is None or self._fetched_at is None:
            return False
        return (self._clock() - self._fetched_at) < self._ttl

    async def fetch_appointments(self) -> list[AppointmentRecord]:
        if self._is_fresh():
            return list(self._records or [])

        generation = self._generation
        records = await self._source.fetch_appointments()
        # A reload that happened while this fetch was outstanding wins.
        if generation == self._generation:
            self._records = list(records)
            self._fetched_at = self._clock()
        return list(records)

    def reload(self) -> None:
        self._records = None
        self._fetched_at = None
        self._generation += 1
        self._logger.info("Record cache discarded", extra={"reason": f"generation={self._generation}"})
