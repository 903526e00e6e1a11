"""
Configuration management for the fmq client.
Loads and validates configuration from YAML files using Pydantic.
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, validator, ConfigDict

from . import __version__
from .factory import TransportFactory
from .interfaces import QueueConfigError, TransportType


logger = logging.getLogger(__name__)


class ClientConfig(BaseModel):
    """Queue endpoint and transport configuration."""
    model_config = ConfigDict(extra='forbid')

    base_url: str = Field(
        default="http://localhost:8080/messages",
        description="Queue endpoint URL"
    )
    transport: TransportType = Field(
        default=TransportType.HTTPX,
        description="HTTP library used for requests"
    )
    timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        le=300.0,
        description="Request timeout in seconds"
    )
    follow_redirects: bool = Field(
        default=False,
        description="Follow HTTP redirects"
    )
    user_agent: str = Field(
        default=f"fmq-client/{__version__}",
        description="User-Agent header"
    )

    @validator('base_url')
    def validate_base_url(cls, v):
        try:
            return TransportFactory.validate_base_url(v)
        except QueueConfigError as e:
            raise ValueError(str(e)) from e

    @validator('transport', pre=True)
    def validate_transport(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(
        default="INFO",
        description="Logging level"
    )
    json_format: bool = Field(
        default=False,
        description="Enable JSON log formatting"
    )
    enable_correlation: bool = Field(
        default=False,
        description="Enable correlation IDs in logs"
    )

    @validator('level')
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()


class FmqConfig(BaseModel):
    """Main configuration."""
    model_config = ConfigDict(extra='forbid')

    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> FmqConfig:
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file, defaults to FMQ_CONFIG_PATH env var or ./fmq.yml

    Returns:
        Loaded and validated configuration

    Raises:
        QueueConfigError: If the YAML cannot be parsed or validation fails
    """
    if config_path is None:
        config_path = os.getenv('FMQ_CONFIG_PATH', './fmq.yml')

    config_file = Path(config_path)
    yaml_data = {}

    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise QueueConfigError(f"Invalid YAML config: {e}") from e

        if not isinstance(yaml_data, dict):
            raise QueueConfigError(f"Config root must be a mapping: {config_file}")

        logger.info(f"Loaded config from: {config_file}")
    else:
        logger.warning(f"Config file not found: {config_file}, using defaults")

    yaml_data = _apply_env_overrides(yaml_data)

    try:
        config = FmqConfig(**yaml_data)
    except ValidationError as e:
        logger.error(f"Invalid config: {e}")
        raise QueueConfigError(f"Invalid config: {e}") from e

    logger.info(
        "Configuration loaded successfully",
        extra={
            "component": "config",
            "config_file": str(config_file),
            "base_url": config.client.base_url,
            "transport": config.client.transport.value
        }
    )

    return config


def _apply_env_overrides(config_data: dict) -> dict:
    """
    Apply environment variable overrides to config data.

    Supports dot notation for nested keys:
    - FMQ_BASE_URL -> client.base_url
    - FMQ_TIMEOUT -> client.timeout_seconds
    - FMQ_LOG_LEVEL -> logging.level

    Args:
        config_data: Base configuration data

    Returns:
        Configuration data with environment overrides applied
    """
    env_mappings = {
        'FMQ_BASE_URL': 'client.base_url',
        'FMQ_TRANSPORT': 'client.transport',
        'FMQ_TIMEOUT': 'client.timeout_seconds',
        'FMQ_FOLLOW_REDIRECTS': 'client.follow_redirects',
        'FMQ_USER_AGENT': 'client.user_agent',
        'FMQ_LOG_LEVEL': 'logging.level',
        'FMQ_LOG_JSON': 'logging.json_format'
    }

    for env_var, config_path in env_mappings.items():
        env_value = os.getenv(env_var)
        if env_value is not None:
            _set_nested_value(config_data, config_path, env_value)
            logger.debug(f"Applied env override: {env_var} -> {config_path}")

    return config_data


def _set_nested_value(data: dict, path: str, value: str) -> None:
    """
    Set a nested dictionary value using dot notation.

    Args:
        data: Dictionary to modify
        path: Dot-separated path (e.g., 'client.base_url')
        value: Raw string value, pydantic coerces it to the field type
    """
    keys = path.split('.')
    current = data

    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
