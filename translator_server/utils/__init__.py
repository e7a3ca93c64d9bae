"""
Utilities package for the translator sync server.
"""

from .logging import (
    ServiceLogger,
    api_logger,
    configure_logging,
    database_logger,
    lifecycle_logger
)

from .exceptions import (
    TranslatorServerError,
    ValidationError,
    DatabaseError,
    ConfigurationError,
    create_error_response
)

__all__ = [
    "ServiceLogger",
    "api_logger",
    "configure_logging",
    "database_logger",
    "lifecycle_logger",
    "TranslatorServerError",
    "ValidationError",
    "DatabaseError",
    "ConfigurationError",
    "create_error_response"
]
