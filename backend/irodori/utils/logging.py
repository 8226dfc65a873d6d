"""
Irodori Structured Logging
Centralized loguru configuration shared by the API layer.
"""
import sys
from typing import Dict, Any, Optional

from loguru import logger

from irodori.config import config


class StructuredLogger:
    """Structured logger for the Irodori color service."""

    def __init__(self, service: str = config.SERVICE_NAME):
        self.service = service
        self._configure_logger()

    def _configure_logger(self):
        """Replace loguru's default sink with the service format."""
        logger.remove()
        logger.add(
            sys.stdout,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}",
            level=config.LOG_LEVEL,
            serialize=config.LOG_JSON,
        )

    def _log(self, level: str, message: str, extra: Optional[Dict[str, Any]]):
        bound = logger.bind(service=self.service, **(extra or {}))
        bound.log(level, message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, extra)

    def for_request(self, request_id: str):
        """Return a loguru logger bound to a request id."""
        return logger.bind(service=self.service, request_id=request_id)


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create global logger instance."""
    global _logger
    if _logger is None:
        _logger = StructuredLogger()
    return _logger
