from __future__ import annotations

import json

import pytest

from src.votes.decoder import decode_vote
from src.votes.errors import InvalidId, MalformedPayload, VoteDecodeError
from src.votes.models import Vote
from src.votes.snowflake import MAX_SNOWFLAKE, parse_snowflake


def _payload(**overrides):
    payload = {
        "bot": "264811613708746752",
        "user": "140862798832861184",
        "type": "upvote",
        "isWeekend": False,
        "query": "?ref=home",
    }
    payload.update(overrides)
    return {key: value for key, value in payload.items() if value is not ...}


def test_decodes_bot_vote_from_json_bytes() -> None:
    body = json.dumps(_payload(isWeekend=True, query="ref=home&utm=a%20b")).encode("utf-8")

    vote = decode_vote(body)

    assert vote.receiver_id == 264811613708746752
    assert vote.voter_id == 140862798832861184
    assert vote.is_test is False
    assert vote.is_weekend is True
    assert dict(vote.query) == {"ref": "home", "utm": "a b"}


def test_decodes_server_vote_using_guild_alias() -> None:
    vote = decode_vote(_payload(bot=..., guild="81384788765712384", isWeekend=...))

    assert vote.receiver_id == 81384788765712384
    assert vote.is_weekend is False


def test_accepts_json_text() -> None:
    vote = decode_vote(json.dumps(_payload()))
    assert vote.voter_id == 140862798832861184


@pytest.mark.parametrize(
    ("vote_type", "expected"),
    [("test", True), ("upvote", False), ("", False), ("TEST", False), ("something-new", False)],
)
def test_is_test_only_for_exact_test_type(vote_type: str, expected: bool) -> None:
    assert decode_vote(_payload(type=vote_type)).is_test is expected


def test_optional_fields_default_when_absent() -> None:
    vote = decode_vote(_payload(isWeekend=..., query=...))

    assert vote.is_weekend is False
    assert dict(vote.query) == {}


def test_null_query_falls_back_to_empty_mapping() -> None:
    vote = decode_vote(_payload(query=None))
    assert dict(vote.query) == {}


def test_null_weekend_flag_is_malformed() -> None:
    with pytest.raises(MalformedPayload):
        decode_vote(_payload(isWeekend=None))


def test_malformed_query_fragments_do_not_fail_decode() -> None:
    vote = decode_vote(_payload(query="a=1&bogus&c=%FF&d=4"))
    assert dict(vote.query) == {"a": "1", "d": "4"}


def test_non_numeric_receiver_id_is_invalid() -> None:
    with pytest.raises(InvalidId) as exc_info:
        decode_vote(_payload(bot="abc"))
    assert exc_info.value.field == "bot"


def test_non_numeric_voter_id_is_invalid() -> None:
    with pytest.raises(InvalidId):
        decode_vote(_payload(user="12a"))


@pytest.mark.parametrize("value", ["-1", "+1", " 1", "1_0", "", "18446744073709551616", "١"])
def test_rejects_ids_outside_unsigned_64_bit_digits(value: str) -> None:
    with pytest.raises(InvalidId):
        parse_snowflake(value, field="user")


def test_accepts_maximum_unsigned_64_bit_id() -> None:
    assert parse_snowflake(str(MAX_SNOWFLAKE), field="bot") == MAX_SNOWFLAKE
    assert parse_snowflake("0", field="bot") == 0


def test_non_string_id_is_malformed() -> None:
    with pytest.raises(MalformedPayload):
        decode_vote(_payload(user=140862798832861184))


@pytest.mark.parametrize(
    "payload",
    [
        b"not json",
        b"\xff\xfe",
        b"[1, 2, 3]",
        "null",
    ],
)
def test_rejects_payloads_that_are_not_json_objects(payload) -> None:
    with pytest.raises(MalformedPayload):
        decode_vote(payload)


def test_requires_exactly_one_receiver_field() -> None:
    with pytest.raises(MalformedPayload):
        decode_vote(_payload(bot=...))
    with pytest.raises(MalformedPayload):
        decode_vote(_payload(guild="81384788765712384"))


def test_requires_user_and_type() -> None:
    with pytest.raises(MalformedPayload):
        decode_vote(_payload(user=...))
    with pytest.raises(MalformedPayload):
        decode_vote(_payload(type=...))
    with pytest.raises(MalformedPayload):
        decode_vote(_payload(type=1))


def test_rejects_non_boolean_weekend_flag() -> None:
    with pytest.raises(MalformedPayload):
        decode_vote(_payload(isWeekend="true"))


def test_decode_errors_share_a_value_error_base() -> None:
    with pytest.raises(ValueError):
        decode_vote(_payload(bot="abc"))
    assert issubclass(InvalidId, VoteDecodeError)
    assert issubclass(MalformedPayload, VoteDecodeError)


def test_vote_is_immutable() -> None:
    vote = decode_vote(_payload(query="a=1"))

    with pytest.raises(AttributeError):
        vote.receiver_id = 1  # type: ignore[misc]
    with pytest.raises(TypeError):
        vote.query["a"] = "2"  # type: ignore[index]


def test_deeply_nested_body_is_malformed() -> None:
    with pytest.raises(MalformedPayload):
        decode_vote(b"[" * 100000)
    with pytest.raises(MalformedPayload):
        decode_vote('{"a":' * 100000)


@pytest.mark.parametrize(
    ("receiver_id", "voter_id"),
    [(-1, 1), (1, -1), (MAX_SNOWFLAKE + 1, 1), (1, MAX_SNOWFLAKE + 1), (True, 1), ("1", 1)],
)
def test_vote_rejects_ids_outside_unsigned_64_bit_range(receiver_id, voter_id) -> None:
    with pytest.raises(ValueError):
        Vote(receiver_id=receiver_id, voter_id=voter_id, is_test=False)


def test_vote_accepts_boundary_ids() -> None:
    vote = Vote(receiver_id=0, voter_id=MAX_SNOWFLAKE, is_test=False)
    assert vote.voter_id == MAX_SNOWFLAKE
