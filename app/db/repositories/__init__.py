"""Repository classes for database operations."""

from app.db.repositories.base import BaseRepository
from app.db.repositories.schedule import ScheduleRepository
from app.db.repositories.schedule_item import ScheduleItemRepository
from app.db.repositories.system_log import SystemLogRepository

__all__ = [
    "BaseRepository",
    "ScheduleItemRepository",
    "ScheduleRepository",
    "SystemLogRepository",
]
