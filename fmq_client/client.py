"""
Client for a Free Message Queue server.

Some sample usage of the client api:

    from fmq_client import Message, create_queue_client

    with create_queue_client("http://localhost/webserver_agent/messages") as queue:
        message = queue.poll()
        if message.valid and message.options.get("Priority") == "high":
            print(" == URGENT MESSAGE == ")
        print(message.payload)

        queue.put(Message(payload, "application/yaml"))
"""

import logging
from typing import TYPE_CHECKING

from .codec import HeaderCodec, QUEUE_BYTES_HEADER, QUEUE_SIZE_HEADER, parse_stat
from .factory import TransportFactory
from .interfaces import HttpResponse, Message, Transport

if TYPE_CHECKING:
    from .config import ClientConfig


logger = logging.getLogger(__name__)


class QueueClient:
    """
    Client of one remote queue.

    Every call is a single blocking request/response exchange; transport
    errors propagate as QueueConnectionError and nothing is retried.
    """

    def __init__(self, base_url: str, transport: Transport):
        """
        Initialize the client

        Args:
            base_url: Queue endpoint, e.g. "http://localhost/webserver_agent/messages"
            transport: HTTP transport used for all requests
        """
        self.base_url = base_url
        self.transport = transport

    @classmethod
    def from_config(cls, config: "ClientConfig") -> "QueueClient":
        """
        Build a client from a loaded ClientConfig

        Raises:
            QueueConfigError: If the transport cannot be created
        """
        transport = TransportFactory.create_transport(
            config.transport,
            {
                "timeout_seconds": config.timeout_seconds,
                "follow_redirects": config.follow_redirects,
                "user_agent": config.user_agent
            }
        )
        return cls(config.base_url, transport)

    def poll(self, path: str = "") -> Message:
        """
        Fetch one message from the queue

        Args:
            path: Suffix appended to the base URL

        Returns:
            Decoded message; check ``valid`` before using it

        Raises:
            QueueConnectionError: If the request fails
        """
        response = self.transport.get(self._url(path))
        message = HeaderCodec.decode_response(response)

        logger.debug(
            "Polled message",
            extra={
                "component": "queue_client",
                "status_code": response.status_code,
                "valid": message.valid,
                "bytes": message.size(),
                "options": len(message.options)
            }
        )
        return message

    get = poll

    def put(self, message: Message, path: str = "") -> HttpResponse:
        """
        Submit one message to the queue

        Args:
            message: Message to send
            path: Suffix appended to the base URL

        Returns:
            Server response

        Raises:
            QueueConnectionError: If the request fails
        """
        response = self.transport.post(
            self._url(path),
            message.payload,
            HeaderCodec.encode_headers(message)
        )

        logger.debug(
            "Put message",
            extra={
                "component": "queue_client",
                "status_code": response.status_code,
                "bytes": message.size(),
                "content_type": message.content_type
            }
        )
        return response

    post = put

    def head(self, path: str = "") -> HttpResponse:
        """Read the queue state without consuming a message"""
        return self.transport.head(self._url(path))

    def size(self, path: str = "") -> int:
        """Number of messages in the queue"""
        return parse_stat(self.head(path).header(QUEUE_SIZE_HEADER))

    def bytes(self, path: str = "") -> int:
        """Size of the queue in bytes"""
        return parse_stat(self.head(path).header(QUEUE_BYTES_HEADER))

    def close(self) -> None:
        """Close the underlying transport"""
        self.transport.close()

    def __enter__(self) -> "QueueClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"
