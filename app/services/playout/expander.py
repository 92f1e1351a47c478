"""Expansion of a playlist into a schedule's timed items."""

import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories import ScheduleItemRepository
from app.models import PlaylistItem, Schedule, ScheduleItem, ScheduleStatus

logger = logging.getLogger(__name__)


def build_schedule_items(
    start_date: datetime,
    playlist_items: list[PlaylistItem],
) -> list[dict[str, Any]]:
    """Lay playlist items end to end starting at ``start_date``.

    Items are taken in playlist ``order``; each one starts where the
    previous one ends.
    """
    items = []
    offset = 0
    for index, playlist_item in enumerate(sorted(playlist_items, key=lambda p: p.order)):
        start_time = start_date + timedelta(seconds=offset)
        end_time = start_time + timedelta(seconds=playlist_item.duration)
        items.append(
            {
                "title": playlist_item.title,
                "source_url": playlist_item.source_url,
                "duration": playlist_item.duration,
                "start_time": start_time,
                "end_time": end_time,
                "order": index + 1,
                "status": ScheduleStatus.PENDING,
            }
        )
        offset += playlist_item.duration
    return items


async def expand_schedule(db: AsyncSession, schedule: Schedule) -> list[ScheduleItem]:
    """Create the schedule's items from its playlist, once.

    Does nothing when the schedule has no playlist or already owns items.
    The items are written in a single transaction.
    """
    if schedule.playlist is None:
        return []

    repo = ScheduleItemRepository(db)
    if await repo.count_for_schedule(schedule.id) > 0:
        return []

    data = build_schedule_items(schedule.start_date, schedule.playlist.items)
    if not data:
        return []

    created = await repo.create_many(schedule.id, data)
    logger.info(f"Expanded {len(created)} items for schedule {schedule.id}")
    return created
