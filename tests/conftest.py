"""
Pytest configuration and fixtures for the translator sync server tests.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Iterable

import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from translator_server.config.config import Config, DatabaseConfig, MonitoringConfig, ServerConfig
from translator_server.database.connection import Base
from translator_server.database.models import ModelVersion
from translator_server.database.repositories import ModelVersionRepository, TrainingDataRepository


# Test database configuration
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def training_data_repository(db_session) -> TrainingDataRepository:
    return TrainingDataRepository(db_session)


@pytest_asyncio.fixture
async def model_version_repository(db_session) -> ModelVersionRepository:
    return ModelVersionRepository(db_session)


@pytest.fixture
def database_path(tmp_path):
    """Path of a file-backed SQLite database shared by app and seeding code."""
    return tmp_path / "translator.db"


@pytest.fixture
def models_dir(tmp_path):
    directory = tmp_path / "models"
    directory.mkdir()
    return directory


@pytest.fixture
def test_config(database_path, models_dir):
    """Create test configuration."""
    return Config(
        environment="test",
        server=ServerConfig(
            host="127.0.0.1",
            port=8080,
            models_dir=str(models_dir),
            shutdown_timeout_seconds=10.0
        ),
        database=DatabaseConfig(url=f"sqlite:///{database_path}"),
        monitoring=MonitoringConfig(log_level="WARNING")
    )


@pytest.fixture
def seed_model_versions(database_path):
    """Insert model release rows out of band, the way operators maintain them."""

    def _seed(records: Iterable[dict]):
        engine = create_engine(f"sqlite:///{database_path}")
        try:
            Base.metadata.create_all(engine)
            with Session(engine) as session:
                session.add_all(ModelVersion(**record) for record in records)
                session.commit()
        finally:
            engine.dispose()

    return _seed


@pytest.fixture
def release():
    """Build a ModelVersion row released ``days_ago`` days before now."""

    def _release(version: str, file_name: str, days_ago: int = 0, **extra) -> dict:
        return {
            "version": version,
            "file_name": file_name,
            "release_date": datetime.now(timezone.utc) - timedelta(days=days_ago),
            **extra
        }

    return _release
