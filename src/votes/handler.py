"""Application-facing vote handler contract and dispatch."""

from __future__ import annotations

from typing import Protocol

from src.core.logger import bound_vote_context, get_logger
from src.core.metrics import record_vote_handler_error
from src.core.observability import capture_exception
from src.votes.models import Vote


logger = get_logger("votehook.votes.handler")


class VoteHandler(Protocol):
    """Receives authenticated votes.

    The hosting integration awaits ``voted`` once per authenticated delivery.
    Deliveries may run concurrently; each call gets its own immutable Vote.
    """

    async def voted(self, vote: Vote) -> None:
        raise NotImplementedError


class LoggingVoteHandler:
    """Default handler that only records the vote in the logs."""

    async def voted(self, vote: Vote) -> None:
        logger.info("vote_received", **vote.to_log_fields())


def _handler_name(handler: VoteHandler) -> str:
    return type(handler).__name__


async def dispatch_vote(handler: VoteHandler, vote: Vote) -> bool:
    """Run ``handler`` for ``vote``; return False when the handler raised."""

    with bound_vote_context(receiver_id=vote.receiver_id, voter_id=vote.voter_id):
        try:
            await handler.voted(vote)
        except Exception as exc:
            name = _handler_name(handler)
            logger.error("vote_handler_failed", handler=name, error=str(exc))
            record_vote_handler_error(handler=name)
            capture_exception(exc)
            return False
    return True
