"""Persistent activity log shared by the playout engine."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories import SystemLogRepository
from app.models import LogLevel

logger = logging.getLogger(__name__)


def describe_error(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


async def _append(
    db: AsyncSession,
    level: LogLevel,
    message: str,
    metadata: dict[str, Any] | None,
) -> None:
    try:
        await SystemLogRepository(db).append(level, message, metadata)
    except Exception as e:
        await db.rollback()
        logger.error(f"Could not persist system log '{message}': {e}")


async def record_info(
    db: AsyncSession,
    message: str,
    metadata: dict[str, Any] | None = None,
) -> None:
    """Write an INFO system log entry."""
    await _append(db, LogLevel.INFO, message, metadata)


async def record_error(
    db: AsyncSession,
    message: str,
    error: BaseException,
    metadata: dict[str, Any] | None = None,
) -> None:
    """Write an ERROR system log entry as ``"{message}: {error}"``.

    Callers recovering from a database error must roll the session back
    first.
    """
    await _append(db, LogLevel.ERROR, f"{message}: {describe_error(error)}", metadata)
