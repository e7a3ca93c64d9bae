"""
Configuration package for the translator sync server.
"""

from .config import (
    MODELS_MOUNT_PATH,
    Config,
    DatabaseConfig,
    MonitoringConfig,
    ServerConfig,
    load_config
)

__all__ = [
    "MODELS_MOUNT_PATH",
    "Config",
    "DatabaseConfig",
    "MonitoringConfig",
    "ServerConfig",
    "load_config"
]
