"""
Database package for the translator sync server.
"""

from .connection import (
    Base,
    ConnectionState,
    DatabaseManager,
    init_database,
    close_database
)

from .models import (
    ModelVersion,
    TrainingData
)

from .repositories import (
    BaseRepository,
    TrainingDataRepository,
    ModelVersionRepository
)

__all__ = [
    # Connection management
    "Base",
    "ConnectionState",
    "DatabaseManager",
    "init_database",
    "close_database",

    # Models
    "ModelVersion",
    "TrainingData",

    # Repositories
    "BaseRepository",
    "TrainingDataRepository",
    "ModelVersionRepository"
]
