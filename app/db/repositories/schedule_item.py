"""Schedule item repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base import BaseRepository
from app.models import ScheduleItem, ScheduleStatus


class ScheduleItemRepository(BaseRepository[ScheduleItem]):
    """Repository for schedule item operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, ScheduleItem)

    async def count_for_schedule(self, schedule_id: UUID) -> int:
        """Count all items owned by a schedule, whatever their status."""
        stmt = (
            select(func.count())
            .select_from(ScheduleItem)
            .where(ScheduleItem.schedule_id == schedule_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def create_many(
        self, schedule_id: UUID, items: list[dict[str, Any]]
    ) -> list[ScheduleItem]:
        """Insert all items in one transaction, or none of them."""
        instances = [ScheduleItem(schedule_id=schedule_id, **data) for data in items]
        try:
            self.session.add_all(instances)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return instances

    async def get_pending(
        self,
        schedule_id: UUID,
        due_before: datetime | None = None,
    ) -> list[ScheduleItem]:
        """Get pending items of a schedule in playback order.

        When ``due_before`` is given only items starting at or before it
        are returned.
        """
        stmt = select(ScheduleItem).where(
            ScheduleItem.schedule_id == schedule_id,
            ScheduleItem.status == ScheduleStatus.PENDING,
        )
        if due_before is not None:
            stmt = stmt.where(ScheduleItem.start_time <= due_before)
        stmt = stmt.order_by(ScheduleItem.order)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def _transition(
        self,
        item_id: UUID,
        from_status: ScheduleStatus,
        to_status: ScheduleStatus,
    ) -> bool:
        stmt = (
            update(ScheduleItem)
            .where(
                ScheduleItem.id == item_id,
                ScheduleItem.status == from_status,
            )
            .values(status=to_status)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1

    async def claim(self, item_id: UUID) -> bool:
        """Move an item from PENDING to RUNNING.

        Returns False when the item is no longer pending.
        """
        return await self._transition(item_id, ScheduleStatus.PENDING, ScheduleStatus.RUNNING)

    async def update_status(self, item_id: UUID, status: ScheduleStatus) -> bool:
        """Finish a running item as COMPLETED or FAILED.

        Returns False when the item is not running.
        """
        if status not in (ScheduleStatus.COMPLETED, ScheduleStatus.FAILED):
            raise ValueError(f"Cannot finish a schedule item as {status.value}")
        return await self._transition(item_id, ScheduleStatus.RUNNING, status)
