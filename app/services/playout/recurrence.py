"""Spawning of one-off schedules from recurring ones."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.db.repositories import ScheduleRepository
from app.models import Schedule
from app.services.playout.activity import describe_error, record_error, record_info

logger = logging.getLogger(__name__)


def is_recurrence_due(
    schedule: Schedule,
    now: datetime,
    interval: timedelta | None = None,
) -> bool:
    """Check whether a recurring schedule should spawn a new run.

    The pattern string is not parsed: a schedule with any pattern is due
    once ``interval`` (24 hours by default) has elapsed since its own
    ``start_date``. The anchor never moves.
    """
    if not schedule.recurring_pattern or not schedule.recurring_pattern.strip():
        return False
    if interval is None:
        interval = timedelta(hours=settings.RECURRENCE_INTERVAL_HOURS)
    return now - schedule.start_date >= interval


async def generate_recurrences(
    session_maker: async_sessionmaker[AsyncSession],
    now: datetime,
    interval: timedelta | None = None,
) -> list[Schedule]:
    """Create a new schedule instance for every recurring schedule that is due.

    Each instance is written in its own session; one failure does not
    stop the others. Returns the created schedules.
    """
    async with session_maker() as db:
        recurring = await ScheduleRepository(db).find_recurring_schedules()

    created = []
    for schedule in recurring:
        if not is_recurrence_due(schedule, now, interval):
            continue

        async with session_maker() as db:
            try:
                instance = await ScheduleRepository(db).create_recurring_instance(schedule, now)
            except Exception as e:
                logger.error(
                    f"Error creating recurring schedule instance for {schedule.id}: {describe_error(e)}"
                )
                await db.rollback()
                await record_error(
                    db,
                    "Failed to create recurring schedule instance",
                    e,
                    {"scheduleId": str(schedule.id)},
                )
                continue

            await record_info(
                db,
                "Created recurring schedule instance",
                {
                    "originalScheduleId": str(schedule.id),
                    "newScheduleId": str(instance.id),
                    "runTime": now.isoformat(),
                },
            )
            created.append(instance)

    return created
