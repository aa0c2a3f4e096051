"""Framework-independent handling of a single vote webhook delivery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.logger import get_logger
from src.core.metrics import record_vote_received
from src.votes.auth import IncomingVote
from src.votes.decoder import decode_vote
from src.votes.errors import VoteDecodeError
from src.votes.models import Vote


STATUS_ACCEPTED = "accepted"
STATUS_MALFORMED = "malformed"
STATUS_UNAUTHORIZED = "unauthorized"

logger = get_logger("votehook.votes.webhook")


@dataclass(frozen=True)
class VoteWebhookOutcome:
    status: str
    vote: Optional[Vote] = None
    reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.status == STATUS_ACCEPTED


def receive_vote(
    *,
    body: bytes,
    authorization: Optional[str],
    password: Optional[str],
) -> VoteWebhookOutcome:
    """Decode ``body`` and check ``authorization`` against ``password``.

    Authentication is skipped when ``password`` is empty or None.
    """

    try:
        vote = decode_vote(body)
    except VoteDecodeError as exc:
        record_vote_received(status=STATUS_MALFORMED)
        logger.warning("vote_rejected", status=STATUS_MALFORMED, reason=str(exc))
        return VoteWebhookOutcome(status=STATUS_MALFORMED, reason=str(exc))

    if password:
        incoming = IncomingVote(authorization=authorization or "", vote=vote)
        authenticated = incoming.authenticate(password)
        if authenticated is None:
            record_vote_received(status=STATUS_UNAUTHORIZED)
            logger.warning(
                "vote_rejected",
                status=STATUS_UNAUTHORIZED,
                reason="invalid_authorization",
                has_authorization=authorization is not None,
            )
            return VoteWebhookOutcome(status=STATUS_UNAUTHORIZED, reason="Invalid vote webhook authorization")
        vote = authenticated

    record_vote_received(status=STATUS_ACCEPTED)
    logger.info(
        "vote_accepted",
        receiver_id=str(vote.receiver_id),
        voter_id=str(vote.voter_id),
        is_test=vote.is_test,
    )
    return VoteWebhookOutcome(status=STATUS_ACCEPTED, vote=vote)
