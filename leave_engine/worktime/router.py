"""Work-time router — stateless duration calculation."""

from fastapi import APIRouter, Depends

from leave_engine.dependencies import get_schedule
from leave_engine.worktime.schedule import WorkSchedule
from leave_engine.worktime.schemas import DurationRequest, DurationResult
from leave_engine.worktime.service import calc_working_duration

router = APIRouter(prefix="", tags=["worktime"])


# ── POST /duration ──────────────────────────────────────────────────

@router.post("/duration", response_model=DurationResult)
async def working_duration(
    body: DurationRequest,
    schedule: WorkSchedule = Depends(get_schedule),
):
    """Business minutes between two instants. Malformed dates → 422."""
    return calc_working_duration(
        body.start,
        body.end,
        holidays=body.holidays,
        use_standard_4_hour_blocks=body.use_standard_4_hour_blocks,
        schedule=schedule,
    )
