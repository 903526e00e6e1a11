"""
Logging configuration for fmq client applications.
Provides structured JSON logging with correlation IDs.

The library only creates module loggers; applications call
setup_logging() once at startup if they want this formatting.
"""

import logging
import sys
import json
import time
from datetime import datetime, timezone
from typing import Any, Optional


STANDARD_FIELDS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'taskName',
    'message', 'asctime'
})


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    Formats log records as JSON with consistent fields.
    """

    def __init__(
        self,
        service_name: str = "fmq-client",
        include_extra: bool = True
    ):
        """
        Initialize JSON formatter.

        Args:
            service_name: Name of the service for log identification
            include_extra: Whether to include extra fields from log record
        """
        super().__init__()
        self.service_name = service_name
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if self.include_extra:
            for key, value in record.__dict__.items():
                if key not in STANDARD_FIELDS and not key.startswith('_'):
                    log_entry[key] = value

        return json.dumps(log_entry, default=self._json_default)

    @staticmethod
    def _json_default(obj: Any) -> str:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, bytes):
            return obj.decode("utf-8", errors="replace")
        return str(obj)


class CorrelationFilter(logging.Filter):
    """
    Logging filter that adds correlation ID to log records.
    """

    def __init__(self, correlation_id: Optional[str] = None):
        """
        Initialize correlation filter.

        Args:
            correlation_id: Static correlation ID, or None to generate one per record
        """
        super().__init__()
        self.correlation_id = correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, 'correlation_id'):
            record.correlation_id = self.correlation_id or self._generate_correlation_id()
        return True

    @staticmethod
    def _generate_correlation_id() -> str:
        return f"fmq-{int(time.time() * 1000)}"


def setup_logging(
    level: str = "INFO",
    service_name: str = "fmq-client",
    enable_json: bool = False,
    enable_correlation: bool = False
) -> None:
    """
    Setup logging configuration for an application using the client.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        service_name: Service name for log identification
        enable_json: Whether to use JSON formatting
        enable_correlation: Whether to add correlation IDs

    Raises:
        ValueError: If the level is unknown
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    if enable_json:
        formatter = JSONFormatter(service_name=service_name)
    else:
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    if enable_correlation:
        handler.addFilter(CorrelationFilter())

    logging.root.setLevel(numeric_level)
    logging.root.handlers.clear()
    logging.root.addHandler(handler)

    # Quiet the transports' own debug output
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured",
        extra={
            "component": "logger",
            "level": level,
            "json_enabled": enable_json,
            "correlation_enabled": enable_correlation
        }
    )


def setup_logging_from_config(config) -> None:
    """Apply a LoggingConfig section"""
    setup_logging(
        level=config.level,
        enable_json=config.json_format,
        enable_correlation=config.enable_correlation
    )
