"""Scheduler control schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SchedulerStatus(BaseModel):
    """Schema for scheduler status."""

    model_config = ConfigDict(populate_by_name=True)

    running: bool = Field(serialization_alias="isRunning")
    last_check: datetime | None = Field(None, serialization_alias="lastCheck")


class SchedulerAction(BaseModel):
    """Schema for a scheduler control request."""

    model_config = ConfigDict(populate_by_name=True)

    action: str = Field(..., description="One of: start, stop, execute")
    schedule_id: UUID | None = Field(None, alias="scheduleId")


class SchedulerActionResult(BaseModel):
    """Schema for a scheduler control response."""

    success: bool = True
    message: str
