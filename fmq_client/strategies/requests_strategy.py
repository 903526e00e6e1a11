"""
requests transport for the fmq client.
"""

import logging
from typing import Any, List, Mapping, Optional

import requests

from ..interfaces import HttpResponse, QueueConnectionError, Transport


logger = logging.getLogger(__name__)


class RequestsResponse(HttpResponse):
    """HttpResponse over a ``requests.Response``"""

    def __init__(self, response: requests.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def body(self) -> bytes:
        return self._response.content or b""

    @property
    def raw(self) -> requests.Response:
        return self._response

    def header(self, name: str) -> Optional[str]:
        return self._response.headers.get(name)

    def header_names(self) -> List[str]:
        # CaseInsensitiveDict iterates over the last-set original casing
        return list(self._response.headers.keys())


class RequestsTransport(Transport):
    """
    Transport backed by a single ``requests.Session``.
    The session is reused across calls for connection keep-alive.
    """

    def __init__(
        self,
        timeout_seconds: float = 5.0,
        follow_redirects: bool = False,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize requests transport.

        Args:
            timeout_seconds: Request timeout in seconds
            follow_redirects: Whether to follow redirects
            user_agent: User-Agent header sent with every request
            session: Preconfigured session, mostly for tests
        """
        if session is None:
            session = requests.Session()
            if user_agent:
                session.headers["User-Agent"] = user_agent
        self.session = session
        self.timeout = timeout_seconds
        self.follow_redirects = follow_redirects

    def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> HttpResponse:
        return self._request("GET", url, headers=headers)

    def post(
        self,
        url: str,
        body: bytes,
        headers: Optional[Mapping[str, str]] = None
    ) -> HttpResponse:
        return self._request("POST", url, data=body, headers=headers)

    def head(self, url: str) -> HttpResponse:
        return self._request("HEAD", url)

    def _request(self, method: str, url: str, **kwargs: Any) -> HttpResponse:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.timeout,
                allow_redirects=self.follow_redirects,
                **kwargs
            )
        except requests.RequestException as e:
            logger.error(
                f"{method} {url} failed: {e}",
                extra={"component": "requests_transport", "method": method, "url": url}
            )
            raise QueueConnectionError(f"{method} {url} failed: {e}") from e

        logger.debug(
            f"{method} {url} -> {response.status_code}",
            extra={
                "component": "requests_transport",
                "method": method,
                "url": url,
                "status_code": response.status_code
            }
        )
        return RequestsResponse(response)

    def close(self) -> None:
        """Close the requests session"""
        self.session.close()
        logger.debug("requests transport closed")
