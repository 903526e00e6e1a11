"""
httpx transport for the fmq client.
"""

import logging
from typing import Any, List, Mapping, Optional

import httpx

from ..interfaces import HttpResponse, QueueConnectionError, Transport


logger = logging.getLogger(__name__)


class HttpxResponse(HttpResponse):
    """HttpResponse over an ``httpx.Response``"""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def body(self) -> bytes:
        return self._response.content

    @property
    def raw(self) -> httpx.Response:
        return self._response

    def header(self, name: str) -> Optional[str]:
        return self._response.headers.get(name)

    def header_names(self) -> List[str]:
        # headers.keys() is lowercased, raw keeps the received casing
        encoding = self._response.headers.encoding
        names = {}
        for key, _ in self._response.headers.raw:
            name = key.decode(encoding)
            names.setdefault(name.lower(), name)
        return list(names.values())


class HttpxTransport(Transport):
    """
    Transport backed by a single ``httpx.Client``.
    The client is reused across calls for connection keep-alive.
    """

    def __init__(
        self,
        timeout_seconds: float = 5.0,
        follow_redirects: bool = False,
        user_agent: Optional[str] = None,
        client: Optional[httpx.Client] = None
    ):
        """
        Initialize httpx transport.

        Args:
            timeout_seconds: Request timeout in seconds
            follow_redirects: Whether to follow redirects
            user_agent: User-Agent header sent with every request
            client: Preconfigured client, mostly for tests
        """
        if client is None:
            headers = {"User-Agent": user_agent} if user_agent else None
            client = httpx.Client(
                timeout=httpx.Timeout(timeout_seconds),
                follow_redirects=follow_redirects,
                headers=headers
            )
        self.client = client

    def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        return self._request("GET", url, headers=headers)

    def post(
        self,
        url: str,
        body: bytes,
        headers: Optional[Mapping[str, str]] = None
    ) -> HttpResponse:
        return self._request("POST", url, content=body, headers=headers)

    def head(self, url: str) -> HttpResponse:
        return self._request("HEAD", url)

    def _request(self, method: str, url: str, **kwargs: Any) -> HttpResponse:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error(
                f"{method} {url} failed: {e}",
                extra={"component": "httpx_transport", "method": method, "url": url}
            )
            raise QueueConnectionError(f"{method} {url} failed: {e}") from e

        logger.debug(
            f"{method} {url} -> {response.status_code}",
            extra={
                "component": "httpx_transport",
                "method": method,
                "url": url,
                "status_code": response.status_code
            }
        )
        return HttpxResponse(response)

    def close(self) -> None:
        """Close the httpx client"""
        self.client.close()
        logger.debug("httpx transport closed")
