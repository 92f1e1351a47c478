"""System log endpoints."""

from fastapi import APIRouter, Query

from app.api.deps import DbSession
from app.db.repositories import SystemLogRepository
from app.models import LogLevel
from app.schemas import SystemLogList

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("", response_model=SystemLogList)
async def list_system_logs(
    db: DbSession,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    level: LogLevel | None = None,
):
    """List persistent system log entries, newest first."""
    repo = SystemLogRepository(db)
    items, total = await repo.list(level=level, skip=skip, limit=limit)
    return SystemLogList(items=items, total=total, skip=skip, limit=limit)
