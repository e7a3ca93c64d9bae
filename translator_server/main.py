"""
Translator sync server entry point.
"""

import asyncio
import sys

from dotenv import load_dotenv

from translator_server.config.config import Config, load_config
from translator_server.lifecycle import LifecycleManager
from translator_server.utils.exceptions import ConfigurationError
from translator_server.utils.logging import configure_logging, lifecycle_logger as logger


def log_environment(config: Config):
    """Log the resolved settings without leaking the connection string."""
    logger.info(
        "Environment variables loaded",
        event="environment",
        metadata={
            "port": config.server.port,
            "environment": config.environment,
            "database_url": "URL is set" if config.database_url_set else "URL is not set",
            "models_dir": config.server.models_dir
        }
    )


def main() -> int:
    load_dotenv()

    try:
        config = load_config()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.message}", event="configuration_error",
                     metadata={"config_key": e.config_key})
        return 2

    configure_logging(config.monitoring.log_level)
    log_environment(config)

    manager = LifecycleManager(config)
    return asyncio.run(manager.run())


if __name__ == "__main__":
    sys.exit(main())
