"""User model for dashboard operators."""

from uuid import UUID, uuid4

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.base import TimestampMixin


class User(Base, TimestampMixin):
    """Represents a dashboard user who owns schedules."""

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Relationships
    schedules: Mapped[list["Schedule"]] = relationship(  # noqa: F821
        back_populates="user", cascade="all, delete-orphan"
    )
