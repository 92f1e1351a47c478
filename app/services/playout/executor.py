"""Execution of schedule items against the media server."""

import asyncio
import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db.repositories import ScheduleItemRepository
from app.models import Schedule, ScheduleItem, ScheduleStatus
from app.services.playout.activity import describe_error, record_error, record_info
from app.services.playout.expander import expand_schedule

logger = logging.getLogger(__name__)


class ScheduleExecutor:
    """Drives schedule items through PENDING -> RUNNING -> COMPLETED/FAILED.

    ``client`` is anything with an async ``play(stream_name, source_url)``.
    """

    def __init__(self, client, command_timeout: float | None = None):
        self.client = client
        self.command_timeout = (
            command_timeout
            if command_timeout is not None
            else settings.PLAYOUT_COMMAND_TIMEOUT_SECONDS
        )

    async def execute_schedule(
        self,
        db: AsyncSession,
        schedule: Schedule,
        due_before: datetime | None = None,
    ) -> int:
        """Expand the schedule if needed and run its pending items in order.

        Items are read fresh from the store after expansion. Returns the
        number of items that completed. Errors outside a single item
        propagate to the caller.
        """
        logger.info(f"Executing schedule: {schedule.name}")

        await expand_schedule(db, schedule)

        pending = await ScheduleItemRepository(db).get_pending(schedule.id, due_before)
        completed = 0
        for item in pending:
            status = await self.execute_item(db, item, schedule)
            if status == ScheduleStatus.COMPLETED:
                completed += 1

        await record_info(
            db,
            f"Schedule {schedule.name} executed successfully",
            {"scheduleId": str(schedule.id), "scheduleName": schedule.name},
        )
        return completed

    async def execute_item(
        self,
        db: AsyncSession,
        item: ScheduleItem,
        schedule: Schedule,
    ) -> ScheduleStatus | None:
        """Run one item. Remote failures mark it FAILED and are not raised.

        Returns the final status, or None if the item was no longer pending.
        """
        repo = ScheduleItemRepository(db)
        item_id, title = item.id, item.title
        context = {
            "scheduleItemId": str(item_id),
            "scheduleId": str(schedule.id),
            "title": title,
        }

        if not await repo.claim(item_id):
            logger.info(f"Schedule item {title} is no longer pending, skipping")
            return None

        logger.info(f"Executing schedule item: {title}")
        try:
            await asyncio.wait_for(
                self.client.play(schedule.stream.name, item.source_url),
                timeout=self.command_timeout,
            )
        except Exception as e:
            logger.error(f"Error executing schedule item {title}: {describe_error(e)}")
            await repo.update_status(item_id, ScheduleStatus.FAILED)
            await record_error(db, f"Failed to execute schedule item {title}", e, context)
            return ScheduleStatus.FAILED

        await repo.update_status(item_id, ScheduleStatus.COMPLETED)
        await record_info(db, f"Schedule item {title} completed", context)
        return ScheduleStatus.COMPLETED
