"""
Model version API routes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from translator_server.api.dependencies import get_model_update_service
from translator_server.api.models import ErrorResponseModel, ModelUpdateResponseModel
from translator_server.services.model_update_service import ModelUpdateService

router = APIRouter(prefix="/model", tags=["model"])


@router.get(
    "/check-version",
    response_model=ModelUpdateResponseModel,
    response_model_exclude_none=True,
    responses={
        500: {"model": ErrorResponseModel, "description": "Store error"}
    },
    summary="Check for a model update",
    description=(
        "Compare the client's model version with the latest active release. "
        "The comparison is exact string inequality, not version ordering."
    )
)
async def check_version(
    version: Optional[str] = Query(None, description="Model version installed on the client"),
    service: ModelUpdateService = Depends(get_model_update_service)
) -> ModelUpdateResponseModel:
    result = await service.check(version)
    return ModelUpdateResponseModel(
        has_update=result.has_update,
        latest_version=result.latest_version,
        description=result.description,
        download_url=result.download_url
    )
