"""Tests for bearer token parsing."""

from wellness_sessions.services.auth import parse_bearer_token


def test_parse_bearer_token() -> None:
    assert parse_bearer_token("Bearer abc.def") == "abc.def"
    assert parse_bearer_token("bearer   abc ") == "abc"


def test_parse_bearer_token_rejects_other_schemes() -> None:
    assert parse_bearer_token(None) is None
    assert parse_bearer_token("") is None
    assert parse_bearer_token("Basic abc") is None
    assert parse_bearer_token("Bearer ") is None
