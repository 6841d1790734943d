"""Decoding utilities: hex payload parsing and ABI topic-word access."""

from __future__ import annotations

import re

from punktransfers.core.errors import MalformedDataError, MalformedTopicError, ValueOutOfRangeError

_HEX_RE = re.compile(r"[0-9a-fA-F]+")

TOPIC_HEX_LEN = 64  # one 32-byte ABI word
ADDRESS_HEX_LEN = 40  # 20 bytes


def strip_0x(h: str) -> str:
    return h[2:] if h[:2].lower() == "0x" else h


def is_hex_body(h: str) -> bool:
    """True for a non-empty string of hex digits (no prefix, no separators)."""
    return _HEX_RE.fullmatch(h) is not None


def address_from_topic(topic_hex: str | None, field: str) -> str:
    """Return the address left-padded into a 32-byte topic word.

    The low-order 20 bytes (rightmost 40 hex characters) are kept,
    lowercased and re-prefixed with 0x.
    """
    if topic_hex is None:
        raise MalformedTopicError(field, "missing")
    h = strip_0x(topic_hex)
    if len(h) != TOPIC_HEX_LEN:
        raise MalformedTopicError(field, f"expected {TOPIC_HEX_LEN} hex characters, got {len(h)}")
    if not is_hex_body(h):
        raise MalformedTopicError(field, "malformed hex")
    return "0x" + h[-ADDRESS_HEX_LEN:].lower()


def uint_from_data(data_hex: str | None, field: str, *, max_value: int) -> int:
    """Parse a hex payload as an unsigned integer bounded by `max_value`."""
    if data_hex is None:
        raise MalformedDataError(field, "missing")
    h = strip_0x(data_hex)
    if not h:
        raise MalformedDataError(field, "empty payload")
    if not is_hex_body(h):
        raise MalformedDataError(field, "malformed hex")
    v = int(h, 16)
    if v > max_value:
        raise ValueOutOfRangeError(field, f"value {v} exceeds {max_value}")
    return v
