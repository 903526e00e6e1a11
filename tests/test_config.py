import pytest

from fmq_client import QueueConfigError, TransportType, load_config

ENV_VARS = [
    "FMQ_CONFIG_PATH",
    "FMQ_BASE_URL",
    "FMQ_TRANSPORT",
    "FMQ_TIMEOUT",
    "FMQ_FOLLOW_REDIRECTS",
    "FMQ_USER_AGENT",
    "FMQ_LOG_LEVEL",
    "FMQ_LOG_JSON",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(str(tmp_path / "absent.yml"))

    assert config.client.base_url == "http://localhost:8080/messages"
    assert config.client.transport is TransportType.HTTPX
    assert config.client.timeout_seconds == 5.0
    assert config.logging.level == "INFO"


def test_yaml_file_is_loaded(tmp_path):
    path = tmp_path / "fmq.yml"
    path.write_text(
        "client:\n"
        "  base_url: http://queue.local/messages\n"
        "  transport: requests\n"
        "  timeout_seconds: 2.5\n"
        "logging:\n"
        "  level: debug\n"
        "  json_format: true\n"
    )

    config = load_config(str(path))

    assert config.client.base_url == "http://queue.local/messages"
    assert config.client.transport is TransportType.REQUESTS
    assert config.client.timeout_seconds == 2.5
    assert config.logging.level == "DEBUG"
    assert config.logging.json_format is True


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "fmq.yml"
    path.write_text("client:\n  base_url: http://queue.local/messages\n")
    monkeypatch.setenv("FMQ_CONFIG_PATH", str(path))
    monkeypatch.setenv("FMQ_BASE_URL", "https://other.local/q")
    monkeypatch.setenv("FMQ_TRANSPORT", "Requests")
    monkeypatch.setenv("FMQ_TIMEOUT", "10")
    monkeypatch.setenv("FMQ_FOLLOW_REDIRECTS", "true")

    config = load_config()

    assert config.client.base_url == "https://other.local/q"
    assert config.client.transport is TransportType.REQUESTS
    assert config.client.timeout_seconds == 10.0
    assert config.client.follow_redirects is True


@pytest.mark.parametrize(
    "content",
    [
        "client:\n  base_url: not-a-url\n",
        "client:\n  transport: patron\n",
        "client:\n  timeout_seconds: 0\n",
        "client:\n  retries: 3\n",
        "logging:\n  level: LOUD\n",
    ],
)
def test_invalid_config(tmp_path, content):
    path = tmp_path / "fmq.yml"
    path.write_text(content)

    with pytest.raises(QueueConfigError):
        load_config(str(path))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "fmq.yml"
    path.write_text("client: [unclosed\n")

    with pytest.raises(QueueConfigError, match="Invalid YAML"):
        load_config(str(path))
