from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from foodbank_dashboard.core.config import settings
from foodbank_dashboard.application.ports.checkin_source import CheckInSourcePort
from foodbank_dashboard.application.ports.key_value_store import KeyValueStorePort
from foodbank_dashboard.application.use_cases.aggregate_time_slots import TimeBucketAggregator
from foodbank_dashboard.application.use_cases.build_dashboard import BuildDashboardUseCase
from foodbank_dashboard.application.use_cases.data_version_guard import DataVersionGuard
from foodbank_dashboard.infrastructure.api.checkin_api_client import CheckInApiClient
from foodbank_dashboard.infrastructure.api.mock_checkin_source import MockCheckInSource
from foodbank_dashboard.infrastructure.cache.record_set_cache import RecordSetCache
from foodbank_dashboard.infrastructure.store.json_store import JsonKeyValueStore
from foodbank_dashboard.infrastructure.store.memory_store import MemoryKeyValueStore


logger = logging.getLogger(__name__)


def _is_local() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.SERVICE_TIMEZONE)


@lru_cache
def get_checkin_source() -> CheckInSourcePort:
    if not settings.CHECKIN_API_BASE_URL:
        if _is_local():
            logger.info("Using MockCheckInSource (CHECKIN_API_BASE_URL missing, ENV=dev/local)")
            return MockCheckInSource()
        raise ValueError("CHECKIN_API_BASE_URL is required outside dev/local.")
    logger.info("Using CheckInApiClient", extra={"reason": settings.CHECKIN_API_BASE_URL})
    return CheckInApiClient()


@lru_cache
def get_version_store() -> KeyValueStorePort:
    if settings.VERSION_STORE_PATH:
        return JsonKeyValueStore(path=settings.VERSION_STORE_PATH)
    return MemoryKeyValueStore()


@lru_cache
def get_record_cache() -> RecordSetCache:
    return RecordSetCache(source=get_checkin_source(), ttl_seconds=settings.RECORD_CACHE_TTL_SECONDS)


@lru_cache
def get_aggregator() -> TimeBucketAggregator:
    return TimeBucketAggregator(
        start_hour=settings.OPERATING_START_HOUR,
        end_hour=settings.OPERATING_END_HOUR,
        slot_minutes=settings.SLOT_MINUTES,
    )


def get_build_dashboard_use_case() -> BuildDashboardUseCase:
    cache = get_record_cache()
    return BuildDashboardUseCase(
        source=cache,
        aggregator=get_aggregator(),
        timezone=get_timezone(),
        late_after_hours=settings.LATE_AFTER_HOURS,
        missed_after_hours=settings.MISSED_AFTER_HOURS,
        data_generation=lambda: cache.generation,
    )


@lru_cache
def get_version_guard() -> DataVersionGuard:
    return DataVersionGuard(
        source=get_checkin_source(),
        store=get_version_store(),
        reload_trigger=get_record_cache(),
        poll_interval_seconds=settings.POLL_INTERVAL_SECONDS,
    )


async def close_checkin_source() -> None:
    """Release the cached API client's connections and forget every adapter built on it."""
    if get_checkin_source.cache_info().currsize:
        source = get_checkin_source()
        if isinstance(source, CheckInApiClient):
            await source.aclose()
    get_version_guard.cache_clear()
    get_record_cache.cache_clear()
    get_checkin_source.cache_clear()
