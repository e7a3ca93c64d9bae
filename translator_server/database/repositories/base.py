"""
Base repository implementation with common read/insert operations.
"""

from abc import ABC
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from translator_server.database.connection import Base
from translator_server.utils.exceptions import DatabaseError
from translator_server.utils.logging import database_logger as logger

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType], ABC):
    """Abstract base repository with common operations."""

    def __init__(self, session: AsyncSession, model_class: Type[ModelType]):
        self.session = session
        self.model_class = model_class

    async def create(self, entity: ModelType) -> ModelType:
        """Insert a new entity and return it as persisted."""
        try:
            self.session.add(entity)
            await self.session.commit()
            await self.session.refresh(entity)
            return entity
        except Exception as e:
            logger.error(f"Error creating {self.model_class.__name__}: {str(e)}", exc_info=True)
            raise DatabaseError.from_exception(e, operation="create") from e

    async def get_by_id(self, entity_id: Union[UUID, str]) -> Optional[ModelType]:
        """Get entity by ID."""
        try:
            return await self.session.get(self.model_class, entity_id)
        except Exception as e:
            logger.error(f"Error getting {self.model_class.__name__} by ID {entity_id}: {str(e)}", exc_info=True)
            raise DatabaseError.from_exception(e, operation="get") from e

    async def find_by(self, filters: Optional[Dict[str, Any]] = None, order_by: Optional[List[Any]] = None,
                      limit: Optional[int] = None) -> List[ModelType]:
        """Find entities by filters, optionally ordered and limited."""
        try:
            stmt = self._build_query(filters, order_by, limit)
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Error finding {self.model_class.__name__} by filters: {str(e)}", exc_info=True)
            raise DatabaseError.from_exception(e, operation="find") from e

    async def find_one_by(self, filters: Optional[Dict[str, Any]] = None,
                          order_by: Optional[List[Any]] = None) -> Optional[ModelType]:
        """Find the first entity matching the filters in the given order."""
        try:
            stmt = self._build_query(filters, order_by, 1)
            result = await self.session.execute(stmt)
            return result.scalars().first()
        except Exception as e:
            logger.error(f"Error finding one {self.model_class.__name__} by filters: {str(e)}", exc_info=True)
            raise DatabaseError.from_exception(e, operation="find_one") from e

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count entities with optional filters."""
        try:
            stmt = self._apply_filters(select(self.model_class), filters or {})
            count_stmt = select(func.count()).select_from(stmt.subquery())
            result = await self.session.execute(count_stmt)
            return result.scalar() or 0
        except Exception as e:
            logger.error(f"Error counting {self.model_class.__name__}: {str(e)}", exc_info=True)
            raise DatabaseError.from_exception(e, operation="count") from e

    def _build_query(self, filters: Optional[Dict[str, Any]], order_by: Optional[List[Any]],
                      limit: Optional[int]) -> Select:
        stmt = self._apply_filters(select(self.model_class), filters or {})
        if order_by:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt

    def _apply_filters(self, stmt: Select, filters: Dict[str, Any]) -> Select:
        """Apply equality filters to a select statement."""
        for key, value in filters.items():
            if not hasattr(self.model_class, key):
                raise ValueError(f"{self.model_class.__name__} has no column '{key}'")
            stmt = stmt.where(getattr(self.model_class, key) == value)
        return stmt
