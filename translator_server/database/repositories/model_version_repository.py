"""
Repository for model release records.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from translator_server.database.models import ModelVersion
from translator_server.database.repositories.base import BaseRepository


class ModelVersionRepository(BaseRepository[ModelVersion]):
    """Read access to model versions."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, ModelVersion)

    async def get_latest_active(self) -> Optional[ModelVersion]:
        """Active record with the most recent release date, or None."""
        return await self.find_one_by(
            {"is_active": True},
            order_by=[ModelVersion.release_date.desc()]
        )
