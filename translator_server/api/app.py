"""
FastAPI application factory and configuration.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from translator_server import __version__
from translator_server.api.middleware import setup_middleware
from translator_server.api.routes import model_version_router, system_router, training_data_router
from translator_server.config.config import MODELS_MOUNT_PATH, Config, load_config
from translator_server.database.connection import DatabaseManager, close_database, init_database
from translator_server.utils.exceptions import DatabaseError, TranslatorServerError, create_error_response
from translator_server.utils.logging import api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect and close the store unless a lifecycle manager owns it."""
    owns_store = not app.state.store_managed_externally

    if owns_store:
        await init_database(app.state.db_manager)

    yield

    if owns_store:
        await close_database(app.state.db_manager)


def _correlation_headers(request: Request) -> dict:
    return {"X-Correlation-ID": getattr(request.state, "correlation_id", "unknown")}


def _mount_models(app: FastAPI, models_dir: str):
    try:
        Path(models_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        api_logger.warning(
            f"Could not create model directory {models_dir}: {str(e)}",
            event="models_dir_unavailable"
        )
    app.mount(
        MODELS_MOUNT_PATH,
        StaticFiles(directory=models_dir, check_dir=False),
        name="models"
    )


def create_app(config: Optional[Config] = None, db_manager: Optional[DatabaseManager] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    config = config or load_config()
    db_manager = db_manager or DatabaseManager(config.database)

    app = FastAPI(
        title="Translator Sync Server",
        description="""
        Backend for the English/Myanmar translator client.

        * **Training data**: collect sentence pairs submitted by users for retraining
        * **Model updates**: tell clients whether a newer on-device model exists
        * **Model downloads**: serve model files under `/models`
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url=None if config.is_production else "/docs",
        redoc_url=None if config.is_production else "/redoc",
        openapi_url=None if config.is_production else "/openapi.json"
    )

    app.state.config = config
    app.state.db_manager = db_manager
    app.state.store_managed_externally = False

    setup_middleware(app, config.server.cors_origins)

    app.include_router(system_router)
    app.include_router(training_data_router)
    app.include_router(model_version_router)

    _mount_models(app, config.server.models_dir)

    @app.exception_handler(TranslatorServerError)
    async def translator_server_exception_handler(request: Request, exc: TranslatorServerError):
        """Handle custom server exceptions."""
        metadata = {
            "error_code": exc.error_code,
            "path": request.url.path,
            "method": request.method,
            "correlation_id": getattr(request.state, "correlation_id", None)
        }

        if exc.error_code == "VALIDATION_ERROR":
            api_logger.warning(f"Validation error: {exc.message}", event="validation_error", metadata=metadata)
            status_code = status.HTTP_400_BAD_REQUEST
        else:
            if isinstance(exc, DatabaseError):
                metadata.update({"operation": exc.operation, "code": exc.code, "name": exc.name})
            api_logger.error(
                f"Server error: {exc.error_code} - {exc.message}",
                event="server_error",
                metadata=metadata,
                exc_info=exc
            )
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

        return JSONResponse(
            status_code=status_code,
            content=create_error_response(exc, include_details=config.server.expose_store_errors),
            headers=_correlation_headers(request)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        errors = jsonable_encoder(exc.errors())
        api_logger.warning(
            "Request validation error",
            event="validation_error",
            metadata={
                "path": request.url.path,
                "method": request.method,
                "errors": errors,
                "correlation_id": getattr(request.state, "correlation_id", None)
            }
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Request validation failed",
                "code": "VALIDATION_ERROR",
                "details": errors
            },
            headers=_correlation_headers(request)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions, including 404s from the static file mount."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.detail,
                "code": f"HTTP_{exc.status_code}"
            },
            headers={
                **dict(exc.headers or {}),
                **_correlation_headers(request)
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        api_logger.error(
            f"Unexpected error: {str(exc)}",
            event="unexpected_error",
            metadata={
                "path": request.url.path,
                "method": request.method,
                "correlation_id": getattr(request.state, "correlation_id", None)
            },
            exc_info=exc
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "An unexpected error occurred",
                "code": "INTERNAL_SERVER_ERROR"
            }
        )

    return app
