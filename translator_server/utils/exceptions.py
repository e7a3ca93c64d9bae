"""
Custom exceptions for the translator sync server.
"""

from typing import Any, Dict, Optional


class TranslatorServerError(Exception):
    """Base exception for translator server errors."""

    def __init__(self, message: str, error_code: str = None, details: Dict[str, Any] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "SYSTEM_ERROR"
        self.details = details or {}


class ValidationError(TranslatorServerError):
    """Exception for request validation errors."""

    def __init__(self, message: str, fields: Optional[list] = None, details: Dict[str, Any] = None):
        super().__init__(message, "VALIDATION_ERROR", details)
        self.fields = fields or []


class DatabaseError(TranslatorServerError):
    """Exception for store operations."""

    def __init__(self, message: str, operation: str = None, code: Optional[str] = None,
                 name: Optional[str] = None, details: Dict[str, Any] = None):
        super().__init__(message, "DATABASE_ERROR", details)
        self.operation = operation
        self.code = code
        self.name = name or type(self).__name__

    @classmethod
    def from_exception(cls, exc: Exception, operation: str = None) -> "DatabaseError":
        """Wrap a driver/ORM exception, keeping its own message."""
        if isinstance(exc, DatabaseError):
            return exc
        orig = getattr(exc, "orig", None)
        message = str(orig) if orig is not None else str(exc)
        code = getattr(orig, "sqlstate", None) or getattr(exc, "code", None)
        return cls(message, operation=operation, code=code, name=type(exc).__name__)


class ConfigurationError(TranslatorServerError):
    """Exception for configuration errors."""

    def __init__(self, message: str, config_key: str = None, details: Dict[str, Any] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)
        self.config_key = config_key


GENERIC_STORE_ERROR_MESSAGE = "Internal server error"


def create_error_response(exception: TranslatorServerError, include_details: bool = True) -> Dict[str, Any]:
    """Create the standard ``{"error": message, "code": ...}`` response body."""
    message = exception.message
    if not include_details and isinstance(exception, DatabaseError):
        message = GENERIC_STORE_ERROR_MESSAGE

    response = {
        "error": message,
        "code": exception.error_code
    }

    if include_details and exception.details:
        response["details"] = exception.details

    return response
