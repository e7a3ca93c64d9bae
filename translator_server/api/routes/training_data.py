"""
Training data API routes.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from translator_server.api.dependencies import get_sentence_pair, get_training_data_service
from translator_server.api.models import (
    ErrorResponseModel, TrainingDataCreateModel, TrainingDataResponseModel
)
from translator_server.services.training_data_service import TrainingDataService

router = APIRouter(prefix="/api/training-data", tags=["training-data"])


@router.post(
    "",
    response_model=TrainingDataResponseModel,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponseModel, "description": "Missing english or myanmar text"},
        500: {"model": ErrorResponseModel, "description": "Store error"}
    },
    summary="Submit a sentence pair",
    description="Store an English/Myanmar sentence pair for later model retraining."
)
async def submit_training_data(
    pair: TrainingDataCreateModel = Depends(get_sentence_pair),
    service: TrainingDataService = Depends(get_training_data_service)
) -> TrainingDataResponseModel:
    record = await service.submit(pair.english, pair.myanmar)
    return TrainingDataResponseModel.model_validate(record)


@router.get(
    "",
    response_model=List[TrainingDataResponseModel],
    responses={
        500: {"model": ErrorResponseModel, "description": "Store error"}
    },
    summary="List sentence pairs",
    description="Every stored sentence pair, most recent first. Not paginated."
)
async def list_training_data(
    service: TrainingDataService = Depends(get_training_data_service)
) -> List[TrainingDataResponseModel]:
    records = await service.list_all()
    return [TrainingDataResponseModel.model_validate(record) for record in records]
