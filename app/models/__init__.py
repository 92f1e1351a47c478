"""SQLAlchemy models."""

from app.models.playlist import Playlist, PlaylistItem
from app.models.schedule import Schedule, ScheduleItem, ScheduleStatus
from app.models.stream import Stream
from app.models.system_log import LogLevel, SystemLog
from app.models.user import User

__all__ = [
    "LogLevel",
    "Playlist",
    "PlaylistItem",
    "Schedule",
    "ScheduleItem",
    "ScheduleStatus",
    "Stream",
    "SystemLog",
    "User",
]
