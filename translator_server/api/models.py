"""
Pydantic models for API request/response validation.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrainingDataCreateModel(BaseModel):
    """Model for a submitted sentence pair.

    Both fields are optional at the schema level so that a missing or
    empty value is reported with the service's own 400 message.
    """

    english: Optional[str] = Field(None, description="English sentence")
    myanmar: Optional[str] = Field(None, description="Myanmar sentence")

    @field_validator('english', 'myanmar', mode='before')
    @classmethod
    def coerce_scalars(cls, v: Any) -> Any:
        if not v:
            return None
        if isinstance(v, bool):
            return str(v).lower()
        if isinstance(v, (int, float)):
            return str(v)
        return v


class TrainingDataResponseModel(BaseModel):
    """Model for a persisted sentence pair."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Record identifier")
    english: str = Field(..., description="English sentence")
    myanmar: str = Field(..., description="Myanmar sentence")
    timestamp: datetime = Field(..., description="Submission time")
    synced: bool = Field(..., description="Persisted server-side")


class ModelUpdateResponseModel(BaseModel):
    """Model for the update-check answer."""

    model_config = ConfigDict(populate_by_name=True)

    has_update: bool = Field(..., alias="hasUpdate", description="Client should download the latest model")
    latest_version: Optional[str] = Field(None, alias="latestVersion", description="Latest active model version")
    description: Optional[str] = Field(None, description="Release notes of the latest model")
    download_url: Optional[str] = Field(None, alias="downloadUrl", description="Path of the model file")


class HealthCheckResponseModel(BaseModel):
    """Model for health check response."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="Service health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    port: int = Field(..., description="Configured listen port")
    environment: str = Field(..., description="Deployment environment name")
    database_connection: str = Field(..., alias="databaseConnection", description="Store connection status")


class RootResponseModel(BaseModel):
    """Model for the endpoint directory."""

    status: str = Field(..., description="Server status")
    endpoints: Dict[str, str] = Field(..., description="Available endpoint paths")


class ErrorResponseModel(BaseModel):
    """Model for error responses."""

    error: str = Field(..., description="Error message")
    code: Optional[str] = Field(None, description="Error code")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": "Both english and myanmar texts are required",
            "code": "VALIDATION_ERROR"
        }
    })
