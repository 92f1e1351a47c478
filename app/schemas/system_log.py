"""System log schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models import LogLevel
from app.schemas.common import PaginatedResponse


class SystemLogDetail(BaseModel):
    """Schema for a system log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    level: LogLevel
    message: str
    metadata: dict[str, Any] | None = Field(None, validation_alias="extra_data")
    created_at: datetime


class SystemLogList(PaginatedResponse[SystemLogDetail]):
    """Schema for paginated system log list."""
