from contextlib import asynccontextmanager

from fastapi import FastAPI

from foodbank_dashboard.api.v1.dashboard import router as dashboard_router
from foodbank_dashboard.core.config import settings
from foodbank_dashboard.core.logging_config import configure_logging
from foodbank_dashboard.wiring.dependencies import close_checkin_source, get_version_guard

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    guard = get_version_guard() if settings.VERSION_GUARD_ENABLED else None
    if guard is not None:
        guard.start()
    try:
        yield
    finally:
        if guard is not None:
            await guard.stop()
        # Drops the disposed guard too, so the next startup builds fresh adapters.
        await close_checkin_source()


app = FastAPI(title="Food Bank Check-In Dashboard", version="1.0.0", lifespan=lifespan)

app.include_router(dashboard_router, prefix="/api/v1/dashboard", tags=["dashboard"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
