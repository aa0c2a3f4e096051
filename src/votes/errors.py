"""Error types raised while decoding vote webhooks."""

from __future__ import annotations


class VoteDecodeError(ValueError):
    """Raised when a vote payload cannot be turned into a Vote."""


class MalformedPayload(VoteDecodeError):
    """Raised when the payload does not have the expected vote shape."""


class InvalidId(VoteDecodeError):
    """Raised when a receiver/voter ID is not an unsigned 64-bit integer."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"Invalid {field} ID: {value!r}")
        self.field = field
        self.value = value


class VoteAlreadyConsumedError(RuntimeError):
    """Raised when an IncomingVote is authenticated a second time."""
