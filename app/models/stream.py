"""Stream model for Flussonic output streams."""

from uuid import UUID, uuid4

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.base import TimestampMixin


class Stream(Base, TimestampMixin):
    """Represents a stream configured on the media server."""

    __tablename__ = "streams"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    # Stream name as known by Flussonic; playout commands are routed by it
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    stream_key: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relationships
    schedules: Mapped[list["Schedule"]] = relationship(  # noqa: F821
        back_populates="stream", cascade="all, delete-orphan"
    )
