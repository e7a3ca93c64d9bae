"""
Training data submission and listing.
"""

from typing import Any, List

from translator_server.database.models import TrainingData
from translator_server.database.repositories import TrainingDataRepository
from translator_server.utils.exceptions import ValidationError
from translator_server.utils.logging import api_logger as logger

REQUIRED_FIELDS_MESSAGE = "Both english and myanmar texts are required"


class TrainingDataService:
    """Accepts sentence pairs for retraining and reads them back."""

    def __init__(self, repository: TrainingDataRepository):
        self.repository = repository

    async def submit(self, english: Any, myanmar: Any) -> TrainingData:
        # Falsy check only: no length, encoding or duplicate validation.
        if not english or not myanmar:
            raise ValidationError(REQUIRED_FIELDS_MESSAGE, fields=["english", "myanmar"])

        record = await self.repository.add_pair(str(english), str(myanmar))

        logger.info(
            "Training data saved",
            event="training_data_saved",
            metadata={
                "id": str(record.id),
                "english_length": len(record.english),
                "myanmar_length": len(record.myanmar)
            }
        )
        return record

    async def list_all(self) -> List[TrainingData]:
        return await self.repository.list_newest_first()
