"""
Header codec for the fmq wire convention.

A message travels as the HTTP body plus headers:

    CONTENT-TYPE       payload MIME type
    MESSAGE_<name>     one header per option
    QUEUE_SIZE         message count (HEAD responses only)
    QUEUE_BYTES        queued bytes (HEAD responses only)
"""

import logging
import re
from typing import Dict, Optional

from .interfaces import HttpResponse, Message


logger = logging.getLogger(__name__)


CONTENT_TYPE_HEADER = "CONTENT-TYPE"
OPTION_PREFIX = "MESSAGE_"
QUEUE_SIZE_HEADER = "QUEUE_SIZE"
QUEUE_BYTES_HEADER = "QUEUE_BYTES"

RESERVED_NAMES = frozenset({CONTENT_TYPE_HEADER, QUEUE_SIZE_HEADER, QUEUE_BYTES_HEADER})

OPTION_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_\-]*")


def is_reserved(name: str) -> bool:
    """True if ``name`` collides with a first-class message field"""
    return name.upper() in RESERVED_NAMES


def option_name(header_name: str) -> Optional[str]:
    """
    Extract the option name from a ``MESSAGE_<name>`` header.

    The prefix is compared case-insensitively, the remainder keeps
    the casing it was received with.

    Args:
        header_name: Header name as received

    Returns:
        Option name, or None if the header is not an option header
    """
    if not header_name.upper().startswith(OPTION_PREFIX):
        return None

    name = header_name[len(OPTION_PREFIX):]
    if not OPTION_NAME_PATTERN.fullmatch(name) or is_reserved(name):
        return None

    return name


def parse_stat(value: Optional[str]) -> int:
    """
    Parse a queue statistic header value.

    Args:
        value: Raw header value, may be None

    Returns:
        Integer value, 0 if absent or not an integer
    """
    if value is None:
        return 0

    try:
        return int(value.strip())
    except ValueError:
        logger.debug(
            f"Unparsable queue statistic: {value!r}",
            extra={"component": "header_codec"}
        )
        return 0


class HeaderCodec:
    """Bidirectional mapping between Message and HTTP headers"""

    @staticmethod
    def encode_headers(message: Message) -> Dict[str, str]:
        """
        Build request headers for a message.

        CONTENT-TYPE is left out when the message has no content type.
        Option names are case-insensitive on the wire, so only the first
        of several names differing in case is sent.

        Args:
            message: Message to send

        Returns:
            Header dict with CONTENT-TYPE and one MESSAGE_<name> per option
        """
        headers = {}
        if message.content_type is not None:
            headers[CONTENT_TYPE_HEADER] = message.content_type

        seen = set()
        for name, value in message.options.items():
            if is_reserved(name):
                logger.warning(
                    f"Skipping reserved option name: {name}",
                    extra={"component": "header_codec", "option": name}
                )
                continue
            if name.upper() in seen:
                logger.warning(
                    f"Skipping duplicate option name: {name}",
                    extra={"component": "header_codec", "option": name}
                )
                continue
            seen.add(name.upper())
            headers[f"{OPTION_PREFIX}{name}"] = str(value)

        return headers

    @staticmethod
    def decode_response(response: HttpResponse) -> Message:
        """
        Build a message from a poll response.

        Never raises on missing or malformed headers; whatever does not
        match the convention is left out.

        Args:
            response: Response of a GET request

        Returns:
            Message with valid=True only for status 200
        """
        message = Message(response.body, response.header(CONTENT_TYPE_HEADER))
        message.valid = response.status_code == 200

        for header_name in response.header_names():
            name = option_name(header_name)
            if name is not None:
                message.options[name] = response.header(header_name)

        return message
