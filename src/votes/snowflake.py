"""Decoding of numeric-string IDs (snowflakes) found in vote payloads."""

from __future__ import annotations

import re

from src.votes.errors import InvalidId, MalformedPayload


MAX_SNOWFLAKE = (1 << 64) - 1

_DIGITS_PATTERN = re.compile(r"[0-9]+")


def parse_snowflake(value: object, *, field: str) -> int:
    """Return ``value`` as an unsigned 64-bit integer.

    The wire format carries IDs as strings of ASCII digits. Anything that is
    not a string is a shape problem (``MalformedPayload``); a string that is
    not a plain digit run, or overflows 64 bits, is an ``InvalidId``.
    """

    if not isinstance(value, str):
        raise MalformedPayload(f"Field '{field}' must be a string, got {type(value).__name__}")
    if _DIGITS_PATTERN.fullmatch(value) is None:
        raise InvalidId(field, value)

    parsed = int(value)
    if parsed > MAX_SNOWFLAKE:
        raise InvalidId(field, value)
    return parsed
