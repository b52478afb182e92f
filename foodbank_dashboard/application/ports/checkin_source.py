from __future__ import annotations

from abc import ABC, abstractmethod

from foodbank_dashboard.domain.entities.appointment_record import AppointmentRecord
from foodbank_dashboard.domain.entities.daily_status import DailyStatus


class DailyStatusSourcePort(ABC):
    @abstractmethod
    async def fetch_daily_status(self) -> DailyStatus:
        """Fetch today's dataset status, including the data version token.

        Raises RateLimitedError on 429 and UpstreamError on any other failure.
        """
        raise NotImplementedError


class AppointmentSourcePort(ABC):
    @abstractmethod
    async def fetch_appointments(self) -> list[AppointmentRecord]:
        """Fetch the raw appointment list. A non-success response yields []."""
        raise NotImplementedError


class CheckInSourcePort(AppointmentSourcePort, DailyStatusSourcePort):
    pass
