"""Shared-secret authentication of incoming vote deliveries."""

from __future__ import annotations

import hmac
from typing import Optional

from src.votes.errors import VoteAlreadyConsumedError
from src.votes.models import Vote


def credentials_match(presented: str, expected: str) -> bool:
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))


class IncomingVote:
    """An unauthenticated request carrying a decoded Vote.

    ``authenticate`` may be called once; the wrapped vote is handed over only
    when the presented authorization matches the password.
    """

    __slots__ = ("_authorization", "_vote", "_consumed")

    def __init__(self, *, authorization: str, vote: Vote) -> None:
        self._authorization = authorization
        self._vote = vote
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    def authenticate(self, password: str) -> Optional[Vote]:
        if self._consumed:
            raise VoteAlreadyConsumedError("Incoming vote was already authenticated")
        self._consumed = True

        vote = self._vote
        self._vote = None
        if credentials_match(self._authorization, password):
            return vote
        return None
