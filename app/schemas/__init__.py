"""Pydantic schemas for request/response models."""

from app.schemas.common import PaginatedResponse
from app.schemas.scheduler import SchedulerAction, SchedulerActionResult, SchedulerStatus
from app.schemas.system_log import SystemLogDetail, SystemLogList

__all__ = [
    # Common
    "PaginatedResponse",
    # Scheduler
    "SchedulerAction",
    "SchedulerActionResult",
    "SchedulerStatus",
    # System Log
    "SystemLogDetail",
    "SystemLogList",
]
