"""
Free Message Queue client library

Polls, submits and inspects messages of a queue server over plain HTTP.
Transports: httpx (default) and requests.
"""

__version__ = "1.0.0"

from .interfaces import (
    Message,
    HttpResponse,
    Transport,
    TransportType,
    QueueClientError,
    QueueConnectionError,
    QueueConfigError
)
from .codec import HeaderCodec
from .factory import TransportFactory
from .client import QueueClient
from .config import ClientConfig, FmqConfig, load_config


# Convenience function for quick creation
def create_queue_client(
    base_url: str,
    transport: str = "httpx",
    **config
) -> QueueClient:
    """
    Create a queue client with a validated transport

    Usage:
        client = create_queue_client("http://localhost/messages", "requests", timeout_seconds=2.0)
        message = client.poll()

    Raises:
        QueueConfigError: If the URL, transport or settings are invalid
    """
    TransportFactory.validate_base_url(base_url)
    return QueueClient(base_url, TransportFactory.create_transport(transport, config))


__all__ = [
    "Message",
    "HttpResponse",
    "Transport",
    "TransportType",
    "QueueClientError",
    "QueueConnectionError",
    "QueueConfigError",
    "HeaderCodec",
    "TransportFactory",
    "QueueClient",
    "ClientConfig",
    "FmqConfig",
    "load_config",
    "create_queue_client"
]
