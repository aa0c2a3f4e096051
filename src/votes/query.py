"""Forgiving parser for the vote page query string."""

from __future__ import annotations

from typing import Dict
from urllib.parse import unquote


def parse_vote_query(raw: str) -> Dict[str, str]:
    """Parse ``key=value`` pairs joined by ``&``.

    Fragments without ``=`` and values that do not percent-decode to valid
    UTF-8 are dropped. The last occurrence of a duplicate key wins.
    """

    output: Dict[str, str] = {}
    for pair in raw.split("&"):
        if "=" not in pair:
            continue
        key, value = pair.split("=", 1)
        try:
            decoded = unquote(value, errors="strict")
        except UnicodeDecodeError:
            continue
        output[key] = decoded
    return output
