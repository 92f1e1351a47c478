"""Periodic playout scheduler."""

import asyncio
import logging
import weakref
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config import settings
from app.core.exceptions import NotFoundError
from app.core.telemetry import get_tracer
from app.db.repositories import ScheduleRepository
from app.models import Schedule
from app.services.playout.activity import describe_error, record_error
from app.services.playout.executor import ScheduleExecutor
from app.services.playout.recurrence import generate_recurrences

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SchedulerService:
    """Runs due schedules and spawns recurring ones on a fixed interval.

    One instance is owned by the host process: it is started at startup
    and stopped at shutdown. Ticks never overlap, and a schedule is never
    executed by a tick and ``run_now`` at the same time.

    Args:
        session_maker: Factory for database sessions; every unit of work
            opens its own session so no state is cached between ticks.
        client: Playout command client exposing ``play(stream_name, source_url)``.
        interval_seconds: Time between ticks.
        command_timeout: Upper bound for a single playout command.
        recurrence_interval: Elapsed time after which a recurring schedule
            spawns a new run.
        clock: Returns the current aware UTC datetime.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        client,
        *,
        interval_seconds: float | None = None,
        command_timeout: float | None = None,
        recurrence_interval: timedelta | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.session_maker = session_maker
        self.executor = ScheduleExecutor(client, command_timeout)
        self.interval_seconds = (
            interval_seconds
            if interval_seconds is not None
            else settings.SCHEDULER_INTERVAL_SECONDS
        )
        self.recurrence_interval = recurrence_interval
        self.clock = clock

        self._running = False
        self._task: asyncio.Task | None = None
        self._stop_event: asyncio.Event | None = None
        self._lifecycle_lock = asyncio.Lock()
        self._tick_lock = asyncio.Lock()
        self._schedule_locks: weakref.WeakValueDictionary[UUID, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._last_check: datetime | None = None

    async def start(self) -> None:
        """Run one tick now, then keep ticking every interval.

        Waits for a stop in progress to finish, so at most one loop is armed.
        """
        async with self._lifecycle_lock:
            if self._running:
                logger.info("Scheduler is already running")
                return

            logger.info("Starting scheduler...")
            self._running = True
            stop_event = asyncio.Event()
            self._stop_event = stop_event

            try:
                await self.check_and_execute()
            except Exception as e:
                logger.error(f"Error in scheduler loop: {e}")
            finally:
                self._task = asyncio.create_task(
                    self._run_loop(stop_event), name="playout-scheduler"
                )

    async def stop(self) -> None:
        """Stop future ticks. A tick in progress runs to completion."""
        async with self._lifecycle_lock:
            if not self._running:
                logger.info("Scheduler is not running")
                return

            logger.info("Stopping scheduler...")
            self._running = False
            if self._stop_event is not None:
                self._stop_event.set()

            if self._task is not None:
                await self._task
                self._task = None

    def status(self) -> dict[str, Any]:
        """Report whether the loop is running and when it last checked."""
        return {"running": self._running, "last_check": self._last_check}

    async def run_now(self, schedule_id: UUID) -> dict[str, Any]:
        """Execute one schedule immediately, regardless of item start times.

        Raises:
            NotFoundError: If the schedule does not exist.
        """
        async with self.session_maker() as db:
            schedule = await ScheduleRepository(db).get_with_playlist(schedule_id)

        if schedule is None:
            raise NotFoundError("Schedule", str(schedule_id))

        await self._execute_schedule(schedule, due_before=None, reraise=True)
        return {"success": True, "message": "Schedule executed successfully"}

    async def check_and_execute(self) -> None:
        """Run one tick: execute due schedules, then spawn recurring runs."""
        async with self._tick_lock:
            now = self.clock()
            self._last_check = now

            with tracer.start_as_current_span("scheduler.tick") as span:
                try:
                    async with self.session_maker() as db:
                        schedules = await ScheduleRepository(db).find_due_schedules(now)
                    span.set_attribute("scheduler.due_schedules", len(schedules))

                    for schedule in schedules:
                        await self._execute_schedule(schedule, due_before=now)

                    await generate_recurrences(self.session_maker, now, self.recurrence_interval)

                except Exception as e:
                    logger.exception(f"Error in scheduler: {describe_error(e)}")
                    async with self.session_maker() as db:
                        await record_error(db, "Scheduler error", e)

    async def _execute_schedule(
        self,
        schedule: Schedule,
        due_before: datetime | None,
        reraise: bool = False,
    ) -> None:
        schedule_id, schedule_name = schedule.id, schedule.name
        lock = self._schedule_locks.get(schedule_id)
        if lock is None:
            lock = asyncio.Lock()
            self._schedule_locks[schedule_id] = lock

        async with lock:
            with tracer.start_as_current_span("scheduler.execute_schedule") as span:
                span.set_attribute("schedule.id", str(schedule_id))
                async with self.session_maker() as db:
                    try:
                        await self.executor.execute_schedule(db, schedule, due_before)
                    except Exception as e:
                        logger.error(
                            f"Error executing schedule {schedule_name}: {describe_error(e)}"
                        )
                        await db.rollback()
                        await record_error(
                            db,
                            f"Failed to execute schedule {schedule_name}",
                            e,
                            {"scheduleId": str(schedule_id), "scheduleName": schedule_name},
                        )
                        if reraise:
                            raise

    async def _run_loop(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                try:
                    await self.check_and_execute()
                except Exception as e:
                    logger.error(f"Error in scheduler loop: {e}")
