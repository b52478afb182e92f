from fastapi import APIRouter, Depends, HTTPException

from foodbank_dashboard.api.v1.schemas import (
    AppointmentListResponseSchema,
    AppointmentRowSchema,
    DashboardResponseSchema,
    VersionResponseSchema,
    VisibilityRequestSchema,
)
from foodbank_dashboard.application.exceptions import UpstreamError
from foodbank_dashboard.application.use_cases.build_dashboard import BuildDashboardUseCase
from foodbank_dashboard.application.use_cases.data_version_guard import DataVersionGuard
from foodbank_dashboard.infrastructure.cache.record_set_cache import RecordSetCache
from foodbank_dashboard.wiring.dependencies import (
    get_build_dashboard_use_case,
    get_record_cache,
    get_version_guard,
)

router = APIRouter()


@router.get("", response_model=DashboardResponseSchema)
async def get_dashboard(uc: BuildDashboardUseCase = Depends(get_build_dashboard_use_case)):
    try:
        snapshot = await uc.execute()
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return DashboardResponseSchema.from_snapshot(snapshot)


@router.get("/appointments", response_model=AppointmentListResponseSchema)
async def list_appointments(uc: BuildDashboardUseCase = Depends(get_build_dashboard_use_case)):
    try:
        snapshot = await uc.execute()
    except UpstreamError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return AppointmentListResponseSchema(
        reference_date=snapshot.reference_date,
        data_generation=snapshot.data_generation,
        appointments=[AppointmentRowSchema.from_entity(a) for a in snapshot.appointments],
    )


@router.get("/version", response_model=VersionResponseSchema)
def get_version(
    guard: DataVersionGuard = Depends(get_version_guard),
    cache: RecordSetCache = Depends(get_record_cache),
):
    return VersionResponseSchema(
        data_version=guard.last_version,
        data_generation=cache.generation,
        polling=guard.is_polling,
        visible=guard.is_visible,
    )


@router.post("/visibility", response_model=VersionResponseSchema)
async def set_visibility(
    req: VisibilityRequestSchema,
    guard: DataVersionGuard = Depends(get_version_guard),
    cache: RecordSetCache = Depends(get_record_cache),
):
    guard.set_visible(req.visible)
    return VersionResponseSchema(
        data_version=guard.last_version,
        data_generation=cache.generation,
        polling=guard.is_polling,
        visible=guard.is_visible,
    )
