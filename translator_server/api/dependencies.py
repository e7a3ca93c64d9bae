"""
FastAPI dependencies for the translator sync server.
"""

from typing import AsyncGenerator, Optional

from fastapi import Body, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from translator_server.api.models import TrainingDataCreateModel
from translator_server.config.config import Config
from translator_server.database.connection import DatabaseManager
from translator_server.database.repositories import ModelVersionRepository, TrainingDataRepository
from translator_server.services.model_update_service import ModelUpdateService
from translator_server.services.training_data_service import REQUIRED_FIELDS_MESSAGE, TrainingDataService
from translator_server.utils.exceptions import ValidationError


def get_config(request: Request) -> Config:
    """Get the application configuration."""
    return request.app.state.config


def get_db_manager(request: Request) -> DatabaseManager:
    """Get the store client created at startup."""
    return request.app.state.db_manager


async def get_db_session(
    db_manager: DatabaseManager = Depends(get_db_manager)
) -> AsyncGenerator[AsyncSession, None]:
    """Get a store session for the duration of one request."""
    async with db_manager.get_session() as session:
        yield session


async def get_training_data_repository(session=Depends(get_db_session)) -> TrainingDataRepository:
    """Get training data repository dependency."""
    return TrainingDataRepository(session)


async def get_model_version_repository(session=Depends(get_db_session)) -> ModelVersionRepository:
    """Get model version repository dependency."""
    return ModelVersionRepository(session)


async def get_training_data_service(
    repository: TrainingDataRepository = Depends(get_training_data_repository)
) -> TrainingDataService:
    return TrainingDataService(repository)


async def get_model_update_service(
    repository: ModelVersionRepository = Depends(get_model_version_repository)
) -> ModelUpdateService:
    return ModelUpdateService(repository)


def get_sentence_pair(
    payload: Optional[TrainingDataCreateModel] = Body(None)
) -> TrainingDataCreateModel:
    """Reject submissions missing either text before any store work starts."""
    if payload is None or not payload.english or not payload.myanmar:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE, fields=["english", "myanmar"])
    return payload
