from typing import Dict, List, Optional, Tuple

import pytest

from fmq_client.interfaces import HttpResponse, Transport


class FakeResponse(HttpResponse):
    """In-memory HttpResponse with ordered, case-preserving headers."""

    def __init__(
        self,
        status_code: int = 200,
        headers: Optional[List[Tuple[str, str]]] = None,
        body: bytes = b"",
    ):
        self._status_code = status_code
        self._headers = list(headers or [])
        self._body = body

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> bytes:
        return self._body

    @property
    def raw(self):
        return self

    def header(self, name: str) -> Optional[str]:
        for key, value in self._headers:
            if key.lower() == name.lower():
                return value
        return None

    def header_names(self) -> List[str]:
        return [key for key, _ in self._headers]


class FakeTransport(Transport):
    """Records requests and answers with canned responses."""

    def __init__(self, response: Optional[FakeResponse] = None):
        self.response = response or FakeResponse()
        self.calls: List[Tuple[str, str, Optional[bytes], Dict[str, str]]] = []
        self.closed = False

    def get(self, url, headers=None):
        self.calls.append(("GET", url, None, dict(headers or {})))
        return self.response

    def post(self, url, body, headers=None):
        self.calls.append(("POST", url, body, dict(headers or {})))
        return self.response

    def head(self, url):
        self.calls.append(("HEAD", url, None, {}))
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def fake_transport():
    return FakeTransport()
