"""
API routes package.
"""

from .system import router as system_router
from .training_data import router as training_data_router
from .model_version import router as model_version_router

__all__ = [
    "system_router",
    "training_data_router",
    "model_version_router"
]
