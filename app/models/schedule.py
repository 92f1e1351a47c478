"""Schedule models: playout intents and their timed items."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.types import UTCDateTime
from app.models.base import TimestampMixin


SCHEDULE_NAME_MAX_LENGTH = 255


class ScheduleStatus(str, Enum):
    """Schedule item lifecycle status."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class Schedule(Base, TimestampMixin):
    """Represents an intent to play a playlist on a stream during a window."""

    __tablename__ = "schedules"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(SCHEDULE_NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    start_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(UTCDateTime)

    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False)
    recurring_pattern: Mapped[str | None] = mapped_column(String(100))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    stream_id: Mapped[UUID] = mapped_column(ForeignKey("streams.id"), nullable=False)
    playlist_id: Mapped[UUID | None] = mapped_column(ForeignKey("playlists.id"))
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)

    # Relationships
    stream: Mapped["Stream"] = relationship(back_populates="schedules")  # noqa: F821
    playlist: Mapped["Playlist | None"] = relationship(back_populates="schedules")  # noqa: F821
    user: Mapped["User"] = relationship(back_populates="schedules")  # noqa: F821
    items: Mapped[list["ScheduleItem"]] = relationship(
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="ScheduleItem.order",
    )

    __table_args__ = (
        Index("ix_schedules_active_window", "is_active", "start_date", "end_date"),
    )


class ScheduleItem(Base, TimestampMixin):
    """One timed, playable unit derived from a playlist item."""

    __tablename__ = "schedule_items"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    schedule_id: Mapped[UUID] = mapped_column(
        ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    source_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    order: Mapped[int] = mapped_column(Integer, nullable=False)

    start_time: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    end_time: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    status: Mapped[ScheduleStatus] = mapped_column(
        SQLEnum(ScheduleStatus), default=ScheduleStatus.PENDING, nullable=False
    )

    # Relationships
    schedule: Mapped["Schedule"] = relationship(back_populates="items")

    __table_args__ = (
        UniqueConstraint("schedule_id", "order", name="uq_schedule_items_order"),
        Index("ix_schedule_items_status_start", "schedule_id", "status", "start_time"),
    )
