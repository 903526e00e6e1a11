"""
Telemetry for the fmq client.

Contains logging utilities.
"""

from .logger import setup_logging, setup_logging_from_config, JSONFormatter, CorrelationFilter

__all__ = [
    "setup_logging",
    "setup_logging_from_config",
    "JSONFormatter",
    "CorrelationFilter"
]
