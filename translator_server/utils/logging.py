"""
Structured logging utilities for the translator sync server.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "service": getattr(record, 'service', 'translator-server'),
            "event": getattr(record, 'event', None) or record.funcName,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if getattr(record, 'metrics', None):
            log_entry["metrics"] = record.metrics

        if getattr(record, 'metadata', None):
            log_entry["metadata"] = record.metadata

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ServiceLogger:
    """Logger wrapper that attaches event, metrics and metadata to each record."""

    _instances: List["ServiceLogger"] = []

    def __init__(self, name: str, service: str = "translator-server"):
        self.logger = logging.getLogger(name)
        self.service = service
        self._setup_logger()
        ServiceLogger._instances.append(self)

    def _setup_logger(self):
        """Configure logger with structured formatting."""
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
            self.logger.propagate = False

    def _extra(self, event: Optional[str], metrics: Optional[Dict[str, Any]],
               metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            'service': self.service,
            'event': event,
            'metrics': metrics,
            'metadata': metadata
        }

    def info(self, message: str, event: Optional[str] = None,
             metrics: Optional[Dict[str, Any]] = None,
             metadata: Optional[Dict[str, Any]] = None):
        """Log info level message with structured data."""
        self.logger.info(message, extra=self._extra(event, metrics, metadata))

    def warning(self, message: str, event: Optional[str] = None,
                metrics: Optional[Dict[str, Any]] = None,
                metadata: Optional[Dict[str, Any]] = None):
        """Log warning level message with structured data."""
        self.logger.warning(message, extra=self._extra(event, metrics, metadata))

    def error(self, message: str, event: Optional[str] = None,
              metrics: Optional[Dict[str, Any]] = None,
              metadata: Optional[Dict[str, Any]] = None, exc_info: Any = False):
        """Log error level message with structured data."""
        self.logger.error(message, extra=self._extra(event, metrics, metadata), exc_info=exc_info)

    def debug(self, message: str, event: Optional[str] = None,
              metrics: Optional[Dict[str, Any]] = None,
              metadata: Optional[Dict[str, Any]] = None):
        """Log debug level message with structured data."""
        self.logger.debug(message, extra=self._extra(event, metrics, metadata))

    def request_completed(self, method: str, path: str, status_code: int,
                          processing_time_ms: float, correlation_id: str):
        """Log a finished HTTP request."""
        self.info(
            f"Request completed: {method} {path} - {status_code}",
            event="request_completed",
            metrics={
                "processing_time_ms": processing_time_ms,
                "status_code": status_code
            },
            metadata={
                "correlation_id": correlation_id,
                "method": method,
                "path": path
            }
        )

    def shutdown_step(self, state: str, reason: str):
        """Log a shutdown state transition."""
        self.info(
            f"Shutdown state -> {state}",
            event="shutdown_transition",
            metadata={"state": state, "reason": reason}
        )


def configure_logging(level: str = "INFO"):
    """Apply the configured level to every service logger."""
    resolved = getattr(logging, level.upper(), None)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    for instance in ServiceLogger._instances:
        instance.logger.setLevel(resolved)


# Global logger instances
api_logger = ServiceLogger("translator_server.api", "api")
database_logger = ServiceLogger("translator_server.database", "database")
lifecycle_logger = ServiceLogger("translator_server.lifecycle", "lifecycle")
