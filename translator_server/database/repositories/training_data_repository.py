"""
Repository for English/Myanmar training pairs.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from translator_server.database.models import TrainingData
from translator_server.database.repositories.base import BaseRepository


class TrainingDataRepository(BaseRepository[TrainingData]):
    """Repository for training data operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, TrainingData)

    async def add_pair(self, english: str, myanmar: str) -> TrainingData:
        """Persist a sentence pair; records written here are always synced."""
        return await self.create(TrainingData(english=english, myanmar=myanmar, synced=True))

    async def list_newest_first(self) -> List[TrainingData]:
        """Every stored pair, most recent first.

        Full scan without pagination; fine at the expected volume but it is
        the first thing to revisit if the table grows large.
        """
        return await self.find_by(order_by=[TrainingData.timestamp.desc()])
