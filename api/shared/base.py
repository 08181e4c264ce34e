"""Base classes and common patterns for the application with repository pattern."""
from abc import ABC
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.shared.entities.base import BaseEntity
from api.shared.exceptions import InternalError

T = TypeVar("T", bound=BaseEntity)


class BaseRepository(ABC, Generic[T]):
    """Base repository with common async CRUD operations.

    The session is injected; repositories never create or close it.
    """

    model: Type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entity: T) -> T:
        """Add entity and flush so the store assigns its id."""
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[T]:
        """Get entity by ID."""
        stmt = select(self.model).where(self.model.id == entity_id)
        result = await self._execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_field(
        self, field_name: str, value: Any, limit: Optional[int] = None
    ) -> List[T]:
        """Get entities by field value."""
        field = getattr(self.model, field_name)
        stmt = select(self.model).where(field == value)

        if limit:
            stmt = stmt.limit(limit)

        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def _execute(self, stmt: Any):
        """Run a read statement, mapping driver failures to ``InternalError``."""
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise InternalError(
                f"{self.model.__tablename__} query failed", {"error": str(e)}
            ) from e
