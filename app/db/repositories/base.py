"""Base repository with generic CRUD operations."""

from typing import Generic, TypeVar
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Base repository bound to one model and one session.

    Every write commits immediately.
    """

    def __init__(self, session: AsyncSession, model: type[ModelT]):
        self.session = session
        self.model = model

    async def get(self, id: UUID) -> ModelT | None:
        """Get a single record by ID."""
        return await self.session.get(self.model, id)

    async def create(self, **kwargs) -> ModelT:
        """Create and commit a new record."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.commit()
        await self.session.refresh(instance)
        return instance
