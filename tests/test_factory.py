import importlib

import pytest

from fmq_client import QueueConfigError, TransportFactory, TransportType
from fmq_client.strategies.httpx_strategy import HttpxTransport
from fmq_client.strategies.requests_strategy import RequestsTransport


@pytest.mark.parametrize(
    "transport_type, expected",
    [
        (TransportType.HTTPX, HttpxTransport),
        ("httpx", HttpxTransport),
        (TransportType.REQUESTS, RequestsTransport),
        ("REQUESTS", RequestsTransport),
    ],
)
def test_create_transport(transport_type, expected):
    transport = TransportFactory.create_transport(transport_type, {"timeout_seconds": 1.5})
    try:
        assert isinstance(transport, expected)
    finally:
        transport.close()


def test_unknown_transport_type():
    with pytest.raises(QueueConfigError, match="Unsupported transport"):
        TransportFactory.create_transport("curl", {})


def test_unknown_config_field():
    with pytest.raises(QueueConfigError, match="unknown fields"):
        TransportFactory.create_transport("httpx", {"retries": 3})


@pytest.mark.parametrize("timeout", [0, -1, "5", True])
def test_invalid_timeout(timeout):
    with pytest.raises(QueueConfigError, match="timeout_seconds"):
        TransportFactory.create_transport("requests", {"timeout_seconds": timeout})


def test_missing_library_is_config_error(monkeypatch):
    real_import = importlib.import_module

    def fake_import(name, *args, **kwargs):
        if name.endswith("requests_strategy"):
            raise ImportError("No module named 'requests'")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(importlib, "import_module", fake_import)

    with pytest.raises(QueueConfigError, match="not available"):
        TransportFactory.create_transport("requests", {})


@pytest.mark.parametrize(
    "url", ["http://localhost/messages", "https://queue.example.com:8443/q"]
)
def test_validate_base_url_accepts_http(url):
    assert TransportFactory.validate_base_url(url) == url


@pytest.mark.parametrize("url", [None, "", "localhost/messages", "http://", "file:///tmp/q"])
def test_validate_base_url_rejects(url):
    with pytest.raises(QueueConfigError):
        TransportFactory.validate_base_url(url)
