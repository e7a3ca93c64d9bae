"""
Unit tests for configuration loading.
"""

import pytest

from translator_server.config.config import load_config
from translator_server.utils.exceptions import ConfigurationError


class TestLoadConfig:
    """Test load_config."""

    def test_defaults(self):
        config = load_config({})

        assert config.server.port == 8080
        assert config.server.host == "0.0.0.0"
        assert config.server.models_dir == "models"
        assert config.server.shutdown_timeout_seconds == 10.0
        assert config.server.cors_origins == ["*"]
        assert config.server.expose_store_errors is True
        assert config.database.url == "postgresql://localhost:5432/translator"
        assert config.environment == "development"
        assert config.monitoring.log_level == "INFO"
        assert config.database_url_set is False
        assert not config.is_production

    def test_overrides(self):
        config = load_config({
            "PORT": "3000",
            "HOST": "127.0.0.1",
            "MODELS_DIR": "/srv/models",
            "DATABASE_URL": "postgresql://db/translator",
            "ENVIRONMENT": "production",
            "SHUTDOWN_TIMEOUT_SECONDS": "2.5",
            "EXPOSE_STORE_ERRORS": "false",
            "LOG_LEVEL": "debug",
            "DB_POOL_SIZE": "3"
        })

        assert config.server.port == 3000
        assert config.server.host == "127.0.0.1"
        assert config.server.models_dir == "/srv/models"
        assert config.server.shutdown_timeout_seconds == 2.5
        assert config.server.expose_store_errors is False
        assert config.database.url == "postgresql://db/translator"
        assert config.database.pool_size == 3
        assert config.database_url_set is True
        assert config.is_production
        assert config.monitoring.log_level == "DEBUG"

    def test_cors_origins_list(self):
        config = load_config({"CORS_ORIGINS": "https://a.example, https://b.example,"})

        assert config.server.cors_origins == ["https://a.example", "https://b.example"]

    def test_invalid_port(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config({"PORT": "eighty"})

        assert exc_info.value.config_key == "PORT"

    def test_port_out_of_range(self):
        with pytest.raises(ConfigurationError):
            load_config({"PORT": "70000"})

    def test_invalid_timeout(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config({"SHUTDOWN_TIMEOUT_SECONDS": "soon"})

        assert exc_info.value.config_key == "SHUTDOWN_TIMEOUT_SECONDS"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "9090")

        assert load_config().server.port == 9090
