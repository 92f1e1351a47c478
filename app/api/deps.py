"""Common API dependencies."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.services.playout import SchedulerService


def get_scheduler(request: Request) -> SchedulerService:
    """Dependency for the scheduler owned by the application lifespan."""
    return request.app.state.scheduler


# Type aliases for cleaner annotations
DbSession = Annotated[AsyncSession, Depends(get_db)]
Scheduler = Annotated[SchedulerService, Depends(get_scheduler)]
