"""Scheduler control endpoints."""

from fastapi import APIRouter

from app.api.deps import Scheduler
from app.core.exceptions import BadRequestError
from app.schemas import SchedulerAction, SchedulerActionResult, SchedulerStatus

router = APIRouter(prefix="/scheduler", tags=["scheduler"])


@router.get("", response_model=SchedulerStatus)
async def get_scheduler_status(scheduler: Scheduler):
    """Get whether the scheduler is running and when it last checked."""
    return SchedulerStatus(**scheduler.status())


@router.post("", response_model=SchedulerActionResult)
async def control_scheduler(data: SchedulerAction, scheduler: Scheduler):
    """Start or stop the scheduler, or execute one schedule now."""
    if data.action == "start":
        await scheduler.start()
        return SchedulerActionResult(message="Scheduler started successfully")

    if data.action == "stop":
        await scheduler.stop()
        return SchedulerActionResult(message="Scheduler stopped successfully")

    if data.action == "execute":
        if data.schedule_id is None:
            raise BadRequestError("Schedule ID is required")
        result = await scheduler.run_now(data.schedule_id)
        return SchedulerActionResult(**result)

    raise BadRequestError("Invalid action")
