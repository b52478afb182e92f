from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    CHECKIN_API_BASE_URL: str | None = None
    CHECKIN_API_TOKEN: str | None = None
    REQUEST_TIMEOUT_SECONDS: float = 10.0

    POLL_INTERVAL_SECONDS: float = 30.0
    RECORD_CACHE_TTL_SECONDS: float = 30.0
    VERSION_GUARD_ENABLED: bool = True
    VERSION_STORE_PATH: str = "./data/version_store.json"

    SERVICE_TIMEZONE: str = "America/Vancouver"
    OPERATING_START_HOUR: int = 8
    OPERATING_END_HOUR: int = 20
    SLOT_MINUTES: int = 15

    LATE_AFTER_HOURS: float = 1.0
    MISSED_AFTER_HOURS: float = 4.0


settings = Settings()
