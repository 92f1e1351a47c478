"""Persistent system log entries written by the scheduler."""

from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import Index, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import JSONBType
from app.models.base import TimestampMixin


class LogLevel(str, Enum):
    """System log level enum."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class SystemLog(Base, TimestampMixin):
    """Represents a log entry visible in the dashboard."""

    __tablename__ = "system_logs"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    level: Mapped[LogLevel] = mapped_column(SQLEnum(LogLevel), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    extra_data: Mapped[dict | None] = mapped_column("metadata", JSONBType())

    __table_args__ = (
        Index("ix_system_logs_created_at", "created_at"),
        Index("ix_system_logs_level", "level"),
    )
