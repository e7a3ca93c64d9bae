"""
System API routes: endpoint directory and health checks.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status

from translator_server.api.dependencies import get_config, get_db_manager
from translator_server.api.models import HealthCheckResponseModel, RootResponseModel
from translator_server.config.config import Config
from translator_server.database.connection import ConnectionState, DatabaseManager

router = APIRouter(tags=["system"])

ENDPOINTS = {
    "health": "/api/health",
    "trainingData": "/api/training-data",
    "modelVersion": "/model/check-version"
}


@router.get(
    "/",
    response_model=RootResponseModel,
    summary="Endpoint directory",
    description="List the paths served by this server."
)
async def root() -> RootResponseModel:
    return RootResponseModel(status="Server is running", endpoints=ENDPOINTS)


@router.get(
    "/api/health",
    response_model=HealthCheckResponseModel,
    summary="Health check",
    description="Report liveness and the store connection state without touching the store."
)
async def health_check(
    config: Config = Depends(get_config),
    db_manager: DatabaseManager = Depends(get_db_manager)
) -> HealthCheckResponseModel:
    """Liveness plus the store client's last known connection state."""
    connected = db_manager.connection_state is ConnectionState.CONNECTED
    return HealthCheckResponseModel(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        port=config.server.port,
        environment=config.environment,
        database_connection="connected" if connected else "disconnected"
    )


@router.head("/api/health", include_in_schema=False)
async def health_probe() -> Response:
    # Uptime probes only look at the status line.
    return Response(status_code=status.HTTP_200_OK)
