"""Schedule repository."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.repositories.base import BaseRepository
from app.models import Playlist, Schedule
from app.models.schedule import SCHEDULE_NAME_MAX_LENGTH


class ScheduleRepository(BaseRepository[Schedule]):
    """Repository for schedule operations used by the playout engine."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Schedule)

    @staticmethod
    def _with_playout_context(stmt):
        return stmt.options(
            selectinload(Schedule.stream),
            selectinload(Schedule.playlist).selectinload(Playlist.items),
        )

    async def find_due_schedules(self, now: datetime) -> list[Schedule]:
        """Get active schedules whose window contains ``now``."""
        stmt = self._with_playout_context(
            select(Schedule).where(
                Schedule.is_active == True,  # noqa: E712
                Schedule.start_date <= now,
                or_(Schedule.end_date.is_(None), Schedule.end_date >= now),
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_recurring_schedules(self) -> list[Schedule]:
        """Get active recurring schedules that carry a pattern."""
        stmt = select(Schedule).where(
            Schedule.is_active == True,  # noqa: E712
            Schedule.is_recurring == True,  # noqa: E712
            Schedule.recurring_pattern.is_not(None),
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_with_playlist(self, schedule_id: UUID) -> Schedule | None:
        """Get a schedule with its stream and playlist items loaded."""
        stmt = self._with_playout_context(select(Schedule).where(Schedule.id == schedule_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_recurring_instance(self, original: Schedule, run_time: datetime) -> Schedule:
        """Create a one-off schedule spawned from a recurring one."""
        suffix = f" - {run_time.isoformat()}"
        return await self.create(
            name=original.name[: SCHEDULE_NAME_MAX_LENGTH - len(suffix)] + suffix,
            description=original.description,
            start_date=run_time,
            is_recurring=False,
            is_active=True,
            user_id=original.user_id,
            stream_id=original.stream_id,
            playlist_id=original.playlist_id,
        )
