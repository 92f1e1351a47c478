"""System log repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base import BaseRepository
from app.models import LogLevel, SystemLog


class SystemLogRepository(BaseRepository[SystemLog]):
    """Repository for persistent system log entries."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, SystemLog)

    async def append(
        self,
        level: LogLevel,
        message: str,
        metadata: dict[str, Any] | None = None,
    ) -> SystemLog:
        """Append a log entry."""
        return await self.create(level=level, message=message, extra_data=metadata)

    async def list(
        self,
        *,
        level: LogLevel | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> tuple[list[SystemLog], int]:
        """List log entries, newest first."""
        base_query = select(SystemLog)
        if level is not None:
            base_query = base_query.where(SystemLog.level == level)

        count_stmt = select(func.count()).select_from(base_query.subquery())
        total_result = await self.session.execute(count_stmt)
        total = total_result.scalar() or 0

        stmt = base_query.order_by(SystemLog.created_at.desc()).offset(skip).limit(limit)
        result = await self.session.execute(stmt)
        items = list(result.scalars().all())

        return items, total
