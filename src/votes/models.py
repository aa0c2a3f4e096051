"""Vote record produced from a webhook delivery."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping

from src.votes.snowflake import MAX_SNOWFLAKE


@dataclass(frozen=True)
class Vote:
    """A dispatched bot/server vote event.

    ``receiver_id`` is the bot or server that received the vote and
    ``voter_id`` the user who voted. ``is_test`` is set for test deliveries
    triggered by the owner. ``is_weekend`` reports the weekend multiplier
    (a single vote counts as two); server votes never set it. ``query`` holds
    the query string parameters found on the vote page.
    """

    receiver_id: int
    voter_id: int
    is_test: bool
    is_weekend: bool = False
    query: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in ("receiver_id", "voter_id"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_SNOWFLAKE:
                raise ValueError(f"{name} must be an unsigned 64-bit integer, got {value!r}")
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))

    def to_log_fields(self) -> Dict[str, Any]:
        return {
            "receiver_id": str(self.receiver_id),
            "voter_id": str(self.voter_id),
            "is_test": self.is_test,
            "is_weekend": self.is_weekend,
            "query": dict(self.query),
        }
