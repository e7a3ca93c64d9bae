"""
Services package for the translator sync server.
"""

from .training_data_service import TrainingDataService, REQUIRED_FIELDS_MESSAGE
from .model_update_service import ModelUpdateService, UpdateCheck, compare_versions, build_download_url

__all__ = [
    "TrainingDataService",
    "REQUIRED_FIELDS_MESSAGE",
    "ModelUpdateService",
    "UpdateCheck",
    "compare_versions",
    "build_download_url"
]
