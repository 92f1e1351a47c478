"""Playlist models: ordered templates of playable sources."""

from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.base import TimestampMixin


class Playlist(Base, TimestampMixin):
    """Represents an ordered list of sources to play."""

    __tablename__ = "playlists"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    # Relationships
    items: Mapped[list["PlaylistItem"]] = relationship(
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistItem.order",
    )
    schedules: Mapped[list["Schedule"]] = relationship(back_populates="playlist")  # noqa: F821


class PlaylistItem(Base, TimestampMixin):
    """A single source within a playlist."""

    __tablename__ = "playlist_items"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    playlist_id: Mapped[UUID] = mapped_column(
        ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    source_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # seconds
    order: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-based

    # Relationships
    playlist: Mapped["Playlist"] = relationship(back_populates="items")

    __table_args__ = (
        UniqueConstraint("playlist_id", "order", name="uq_playlist_items_order"),
    )
