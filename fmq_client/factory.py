"""
Factory for creating fmq transports
"""

import importlib
import logging
from typing import Any, Dict, Union
from urllib.parse import urlparse

from .interfaces import QueueConfigError, Transport, TransportType


logger = logging.getLogger(__name__)


_TRANSPORTS = {
    TransportType.HTTPX: ("fmq_client.strategies.httpx_strategy", "HttpxTransport"),
    TransportType.REQUESTS: ("fmq_client.strategies.requests_strategy", "RequestsTransport"),
}

_ALLOWED_FIELDS = {"timeout_seconds", "follow_redirects", "user_agent"}


class TransportFactory:
    """Factory for creating transports"""

    @staticmethod
    def create_transport(
        transport_type: Union[TransportType, str],
        config: Dict[str, Any]
    ) -> Transport:
        """
        Create a Transport for the given HTTP library

        Args:
            transport_type: Transport type or its name
            config: Transport settings (timeout_seconds, follow_redirects, user_agent)

        Returns:
            Transport instance

        Raises:
            QueueConfigError: If the type is unknown, the config is invalid
                or the library is not installed
        """
        transport_type = TransportFactory._resolve_type(transport_type)
        TransportFactory._validate_config(config, transport_type.value)

        module_name, class_name = _TRANSPORTS[transport_type]
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise QueueConfigError(
                f"Transport '{transport_type.value}' is not available: {e}"
            ) from e

        transport = getattr(module, class_name)(**config)
        logger.debug(
            f"Created {transport_type.value} transport",
            extra={"component": "transport_factory", "transport": transport_type.value}
        )
        return transport

    @staticmethod
    def validate_base_url(url: str) -> str:
        """
        Validate the queue endpoint URL

        Raises:
            QueueConfigError: If the URL is not an absolute http(s) URL
        """
        parsed = urlparse(url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise QueueConfigError(f"Invalid queue URL: {url!r}")
        return url

    @staticmethod
    def _resolve_type(transport_type: Union[TransportType, str]) -> TransportType:
        if isinstance(transport_type, TransportType):
            return transport_type
        try:
            return TransportType(str(transport_type).lower())
        except ValueError:
            raise QueueConfigError(f"Unsupported transport: {transport_type}") from None

    @staticmethod
    def _validate_config(config: Dict[str, Any], component_name: str) -> None:
        """
        Validate transport settings

        Raises:
            QueueConfigError: If the config is invalid
        """
        unknown_fields = sorted(set(config) - _ALLOWED_FIELDS)
        if unknown_fields:
            raise QueueConfigError(
                f"{component_name} transport got unknown fields: {unknown_fields}"
            )

        timeout = config.get("timeout_seconds")
        if timeout is not None and (
            isinstance(timeout, bool)
            or not isinstance(timeout, (int, float))
            or timeout <= 0
        ):
            raise QueueConfigError(
                f"{component_name} transport timeout_seconds must be positive: {timeout!r}"
            )
