"""Standalone worker running the playout scheduler without the HTTP API."""

import asyncio
import logging
import signal

from app.config import settings
from app.core.telemetry import setup_all_instrumentation
from app.db.session import async_session_maker
from app.services import FlussonicClient, SchedulerService

logger = logging.getLogger(__name__)


async def main() -> None:
    """Run the scheduler until SIGINT or SIGTERM."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting scheduler worker...")
    logger.info(f"Checking for due schedules every {settings.SCHEDULER_INTERVAL_SECONDS} seconds")

    setup_all_instrumentation()

    shutdown = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown.set)

    scheduler = SchedulerService(async_session_maker, FlussonicClient())
    await scheduler.start()
    try:
        await shutdown.wait()
    finally:
        logger.info("Shutting down scheduler worker...")
        await scheduler.stop()


if __name__ == "__main__":
    asyncio.run(main())
