"""
Interfaces for the fmq client library.
Message value object, transport capabilities and exceptions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union


class TransportType(Enum):
    """Supported HTTP transports"""
    HTTPX = "httpx"
    REQUESTS = "requests"


def _payload_bytes(payload: Any) -> bytes:
    """
    Convert a payload to bytes.

    Raises:
        TypeError: If the payload is neither text nor bytes-like
    """
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, str):
        return payload.encode("utf-8")
    if isinstance(payload, (bytearray, memoryview)):
        return bytes(payload)
    raise TypeError(f"Message payload must be bytes or str, got {type(payload).__name__}")


@dataclass
class Message:
    """
    One queue entry.

    Built by the caller for ``put`` or decoded from a response by ``poll``.
    ``valid`` stays ``None`` until the message comes back from the server.
    """
    payload: Union[bytes, str]
    content_type: Optional[str] = "text/plain"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    options: Dict[str, str] = field(default_factory=dict)
    valid: Optional[bool] = None

    def __setattr__(self, name: str, value: Any) -> None:
        # payload is normalized on construction and on later assignment
        if name == "payload":
            value = _payload_bytes(value)
        super().__setattr__(name, value)

    def size(self) -> int:
        """Size of the payload in bytes"""
        return len(self.payload)


class HttpResponse(ABC):
    """
    Transport-neutral view of an HTTP response.
    The codec only ever talks to this interface.
    """

    @property
    @abstractmethod
    def status_code(self) -> int:
        """HTTP status code"""
        pass

    @property
    @abstractmethod
    def body(self) -> bytes:
        """Raw response body"""
        pass

    @property
    @abstractmethod
    def raw(self) -> Any:
        """Underlying library response object"""
        pass

    @abstractmethod
    def header(self, name: str) -> Optional[str]:
        """
        Look up a header value.

        Args:
            name: Header name, matched case-insensitively

        Returns:
            Header value or None if the header is absent
        """
        pass

    @abstractmethod
    def header_names(self) -> List[str]:
        """
        Header names in the casing they were received with.

        Returns:
            List of distinct header names
        """
        pass


class Transport(ABC):
    """
    Abstract HTTP transport used by QueueClient.
    One implementation per underlying HTTP library.
    """

    @abstractmethod
    def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        """
        Issue a GET request

        Raises:
            QueueConnectionError: If the request could not be completed
        """
        pass

    @abstractmethod
    def post(
        self,
        url: str,
        body: bytes,
        headers: Optional[Mapping[str, str]] = None
    ) -> HttpResponse:
        """
        Issue a POST request

        Raises:
            QueueConnectionError: If the request could not be completed
        """
        pass

    @abstractmethod
    def head(self, url: str) -> HttpResponse:
        """
        Issue a HEAD request

        Raises:
            QueueConnectionError: If the request could not be completed
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying session"""
        pass

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# Custom exceptions
class QueueClientError(Exception):
    """Base error of the fmq client"""
    pass


class QueueConnectionError(QueueClientError):
    """Transport failure: connection, DNS, timeout or malformed HTTP"""
    pass


class QueueConfigError(QueueClientError):
    """Invalid configuration or unavailable transport"""
    pass
