from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from enum import Enum

from foodbank_dashboard.application.exceptions import RateLimitedError, UpstreamError
from foodbank_dashboard.application.ports.checkin_source import DailyStatusSourcePort
from foodbank_dashboard.application.ports.key_value_store import KeyValueStorePort
from foodbank_dashboard.application.ports.reload_trigger import ReloadTriggerPort
from foodbank_dashboard.domain.entities.daily_status import DailyStatus

DATA_VERSION_KEY = "dataVersion"


class VersionCheckOutcome(str, Enum):
    UNCHANGED = "unchanged"
    FIRST_SEEN = "first_seen"
    RELOADED = "reloaded"
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"
    IN_FLIGHT = "in_flight"
    HIDDEN = "hidden"
    DISPOSED = "disposed"


class DataVersionGuard:
    """Watches the server's data version token and forces a hard reload when it changes.

    The persisted token is the only staleness signal: a new token always reloads,
    an unchanged token never does, and the very first token seen is just stored.
    Polling runs on the event loop, pauses while the hosting view is hidden and
    never overlaps two fetches.
    """

    def __init__(
        self,
        source: DailyStatusSourcePort,
        store: KeyValueStorePort,
        reload_trigger: ReloadTriggerPort,
        poll_interval_seconds: float = 30.0,
        key: str = DATA_VERSION_KEY,
        visible: bool = True,
    ) -> None:
        if poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be positive")
        self._source = source
        self._store = store
        self._reload_trigger = reload_trigger
        self._poll_interval = poll_interval_seconds
        self._key = key
        self._visible = visible
        self._in_flight = False
        self._started = False
        self._disposed = False
        self._task: asyncio.Task[None] | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def last_version(self) -> str | None:
        return self._store.get(self._key)

    @property
    def is_polling(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_visible(self) -> bool:
        return self._visible

    async def check_once(self) -> VersionCheckOutcome:
        if self._disposed:
            return VersionCheckOutcome.DISPOSED
        if not self._visible:
            return VersionCheckOutcome.HIDDEN
        if self._in_flight:
            self._logger.debug("Version check already in flight, skipping tick")
            return VersionCheckOutcome.IN_FLIGHT

        self._in_flight = True
        try:
            try:
                status = await self._source.fetch_daily_status()
            except RateLimitedError:
                self._logger.debug("Rate limited, skipping version check")
                return VersionCheckOutcome.RATE_LIMITED
            except UpstreamError as e:
                self._logger.warning("Version check failed, will retry", extra={"reason": str(e)})
                return VersionCheckOutcome.FAILED

            if self._disposed:
                return VersionCheckOutcome.DISPOSED
            return self._apply(status)
        finally:
            self._in_flight = False

    def _apply(self, status: DailyStatus) -> VersionCheckOutcome:
        token = status.data_version
        if not status.success or token is None:
            return VersionCheckOutcome.UNCHANGED

        previous = self._store.get(self._key)
        if previous == token:
            return VersionCheckOutcome.UNCHANGED

        self._store.set(self._key, token)
        if previous is None:
            self._logger.info("Data version recorded", extra={"data_version": token})
            return VersionCheckOutcome.FIRST_SEEN

        self._logger.info(
            "Data version changed, reloading",
            extra={"data_version": token, "previous_version": previous},
        )
        self._reload_trigger.reload()
        return VersionCheckOutcome.RELOADED

    def start(self) -> None:
        """Arm polling on the running event loop. The first check runs immediately."""
        if self._disposed:
            raise RuntimeError("DataVersionGuard was stopped and cannot be restarted")
        self._started = True
        self._logger.info("Version guard started", extra={"data_version": self.last_version})
        if self._visible:
            self._arm()

    async def stop(self) -> None:
        """Cancel the pending timer and dispose; late fetch results become no-ops."""
        self._disposed = True
        task = self._task
        self._task = None
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    def set_visible(self, visible: bool) -> None:
        if self._disposed:
            return
        was_visible = self._visible
        self._visible = visible
        if not visible:
            self._cancel_timer()
        elif not was_visible and self._started:
            self._arm()

    def _arm(self) -> None:
        self._cancel_timer()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def _cancel_timer(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self) -> None:
        while not self._disposed and self._visible:
            try:
                outcome = await self.check_once()
                self._logger.debug("Version check finished", extra={"outcome": outcome.value})
            except Exception as e:
                self._logger.exception("Unexpected error during version check", extra={"reason": str(e)})
            await asyncio.sleep(self._poll_interval)
