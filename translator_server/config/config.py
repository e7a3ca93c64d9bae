"""
Configuration management for the translator sync server.
Values are read from the process environment once, at startup.
"""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from translator_server.utils.exceptions import ConfigurationError


MODELS_MOUNT_PATH = "/models"


@dataclass(frozen=True)
class DatabaseConfig:
    url: str = "postgresql://localhost:5432/translator"
    pool_size: int = 10
    max_overflow: int = 20
    echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def async_url(self) -> str:
        """Connection string with the async driver spelled out."""
        if self.url.startswith("postgresql://"):
            return self.url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if self.url.startswith("postgres://"):
            return self.url.replace("postgres://", "postgresql+asyncpg://", 1)
        if self.url.startswith("sqlite://"):
            return self.url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return self.url


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    models_dir: str = "models"
    shutdown_timeout_seconds: float = 10.0
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    expose_store_errors: bool = True


@dataclass(frozen=True)
class MonitoringConfig:
    log_level: str = "INFO"


@dataclass(frozen=True)
class Config:
    environment: str = "development"
    server: ServerConfig = field(default_factory=ServerConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    database_url_set: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


def _int_env(env: Mapping[str, str], name: str, default: str) -> int:
    raw = env.get(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'", config_key=name)


def _float_env(env: Mapping[str, str], name: str, default: str) -> float:
    raw = env.get(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got '{raw}'", config_key=name)


def _bool_env(env: Mapping[str, str], name: str, default: str) -> bool:
    return env.get(name, default).strip().lower() in ("1", "true", "yes", "on")


def _list_env(env: Mapping[str, str], name: str, default: str) -> List[str]:
    return [item.strip() for item in env.get(name, default).split(",") if item.strip()]


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from environment variables."""
    env = os.environ if environ is None else environ

    port = _int_env(env, "PORT", "8080")
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"PORT out of range: {port}", config_key="PORT")

    server_config = ServerConfig(
        host=env.get("HOST", "0.0.0.0"),
        port=port,
        models_dir=env.get("MODELS_DIR", "models"),
        shutdown_timeout_seconds=_float_env(env, "SHUTDOWN_TIMEOUT_SECONDS", "10"),
        cors_origins=_list_env(env, "CORS_ORIGINS", "*"),
        expose_store_errors=_bool_env(env, "EXPOSE_STORE_ERRORS", "true")
    )

    database_config = DatabaseConfig(
        url=env.get("DATABASE_URL", "postgresql://localhost:5432/translator"),
        pool_size=_int_env(env, "DB_POOL_SIZE", "10"),
        max_overflow=_int_env(env, "DB_MAX_OVERFLOW", "20"),
        echo=_bool_env(env, "DB_ECHO", "false")
    )

    monitoring_config = MonitoringConfig(
        log_level=env.get("LOG_LEVEL", "INFO").upper()
    )

    return Config(
        environment=env.get("ENVIRONMENT", "development"),
        server=server_config,
        database=database_config,
        monitoring=monitoring_config,
        database_url_set="DATABASE_URL" in env
    )
