"""Vote webhook decoding, authentication and dispatch."""

from src.votes.auth import IncomingVote
from src.votes.decoder import decode_vote
from src.votes.errors import InvalidId, MalformedPayload, VoteAlreadyConsumedError, VoteDecodeError
from src.votes.handler import LoggingVoteHandler, VoteHandler, dispatch_vote
from src.votes.models import Vote
from src.votes.query import parse_vote_query
from src.votes.snowflake import parse_snowflake
from src.votes.webhook import VoteWebhookOutcome, receive_vote

__all__ = [
    "IncomingVote",
    "InvalidId",
    "LoggingVoteHandler",
    "MalformedPayload",
    "Vote",
    "VoteAlreadyConsumedError",
    "VoteDecodeError",
    "VoteHandler",
    "VoteWebhookOutcome",
    "decode_vote",
    "dispatch_vote",
    "parse_snowflake",
    "parse_vote_query",
    "receive_vote",
]
