"""Decoding of raw vote webhook bodies into Vote records."""

from __future__ import annotations

import json
from typing import Any, Mapping, Union

from src.votes.errors import MalformedPayload
from src.votes.models import Vote
from src.votes.query import parse_vote_query
from src.votes.snowflake import parse_snowflake


RECEIVER_FIELDS = ("bot", "guild")
VOTER_FIELD = "user"
TYPE_FIELD = "type"
WEEKEND_FIELD = "isWeekend"
QUERY_FIELD = "query"

TEST_VOTE_TYPE = "test"

RawVotePayload = Union[bytes, str, Mapping[str, Any]]


def _load_payload(payload: RawVotePayload) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload

    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = bytes(payload).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedPayload("Vote payload is not valid UTF-8") from exc

    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as exc:
        raise MalformedPayload("Invalid vote JSON payload") from exc

    if not isinstance(data, dict):
        raise MalformedPayload("Vote payload must be a JSON object")
    return data


def _decode_receiver_id(data: Mapping[str, Any]) -> int:
    present = [name for name in RECEIVER_FIELDS if name in data]
    if not present:
        raise MalformedPayload("Vote payload missing required field: bot/guild")
    if len(present) > 1:
        raise MalformedPayload("Vote payload must not carry both bot and guild")

    name = present[0]
    return parse_snowflake(data[name], field=name)


def _decode_is_test(data: Mapping[str, Any]) -> bool:
    if TYPE_FIELD not in data:
        raise MalformedPayload("Vote payload missing required field: type")
    value = data[TYPE_FIELD]
    if not isinstance(value, str):
        raise MalformedPayload("Field 'type' must be a string")
    return value == TEST_VOTE_TYPE


def _decode_is_weekend(data: Mapping[str, Any]) -> bool:
    if WEEKEND_FIELD not in data:
        return False
    value = data[WEEKEND_FIELD]
    if not isinstance(value, bool):
        raise MalformedPayload("Field 'isWeekend' must be a boolean")
    return value


def decode_vote(payload: RawVotePayload) -> Vote:
    """Decode a vote webhook body.

    Accepts the raw request body (``bytes``/``str`` holding JSON) or an
    already parsed mapping. Raises ``MalformedPayload`` when the shape is
    wrong and ``InvalidId`` when an ID is not an unsigned 64-bit integer.
    """

    data = _load_payload(payload)

    receiver_id = _decode_receiver_id(data)
    if VOTER_FIELD not in data:
        raise MalformedPayload("Vote payload missing required field: user")
    voter_id = parse_snowflake(data[VOTER_FIELD], field=VOTER_FIELD)
    is_test = _decode_is_test(data)
    is_weekend = _decode_is_weekend(data)

    raw_query = data.get(QUERY_FIELD)
    query = parse_vote_query(raw_query) if isinstance(raw_query, str) else {}

    return Vote(
        receiver_id=receiver_id,
        voter_id=voter_id,
        is_test=is_test,
        is_weekend=is_weekend,
        query=query,
    )
