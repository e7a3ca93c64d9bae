"""
Database repositories package for the translator sync server.
"""

from .base import BaseRepository
from .training_data_repository import TrainingDataRepository
from .model_version_repository import ModelVersionRepository

__all__ = [
    "BaseRepository",
    "TrainingDataRepository",
    "ModelVersionRepository"
]
