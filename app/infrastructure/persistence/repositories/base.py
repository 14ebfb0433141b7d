"""Base repository: generic lookups and committed write units."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with a primary-key lookup and committing writes.

    Each public write method of a subclass is one unit of work: it commits
    on success and rolls back on failure, so a returned result is durable.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_model(self, entity_id: str) -> ModelType | None:
        """Return a single ORM record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _commit(self) -> None:
        """Commit the current unit; roll back and re-raise on any failure."""
        try:
            await self.db.commit()
        except BaseException:
            await self.db.rollback()
            raise

    async def _add_and_commit(self, obj: ModelType) -> ModelType:
        """Persist a new record in its own unit and return it refreshed."""
        self.db.add(obj)
        await self._commit()
        await self.db.refresh(obj)
        return obj
