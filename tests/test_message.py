from datetime import datetime, timezone

import pytest

from fmq_client import Message


def test_defaults():
    message = Message(b"hello")

    assert message.payload == b"hello"
    assert message.content_type == "text/plain"
    assert message.options == {}
    assert message.valid is None
    assert isinstance(message.created_at, datetime)


def test_str_payload_is_encoded():
    message = Message("héllo", "text/plain; charset=utf-8")

    assert message.payload == "héllo".encode("utf-8")
    assert message.size() == 6


def test_size_is_byte_length():
    assert Message(b"").size() == 0
    assert Message(b"\x00\x01\x02").size() == 3


def test_explicit_created_at_is_kept():
    created = datetime(2008, 6, 1, 20, 19, 28, tzinfo=timezone.utc)

    message = Message(b"x", "application/yaml", created)

    assert message.created_at == created
    assert message.content_type == "application/yaml"


def test_options_are_not_shared_between_instances():
    first = Message(b"a")
    second = Message(b"b")

    first.options["Priority"] = "high"

    assert second.options == {}


def test_bytes_like_payloads_are_copied_to_bytes():
    assert Message(bytearray(b"abc")).payload == b"abc"
    assert Message(memoryview(b"xyz")).payload == b"xyz"


@pytest.mark.parametrize("payload", [3, None, 1.5, ["a"]])
def test_non_bytes_payload_is_rejected(payload):
    with pytest.raises(TypeError):
        Message(payload)


def test_assigned_payload_is_encoded():
    message = Message(b"")

    message.payload = "héllo"

    assert message.payload == "héllo".encode("utf-8")
    assert message.size() == 6

    with pytest.raises(TypeError):
        message.payload = 3
