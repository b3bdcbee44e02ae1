"""Tests for configuration helpers."""

import pytest

from lyrics_bot.config import parse_user_ids
from lyrics_bot.services.authorization import AuthorizationGate


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, set()),
        ("", set()),
        ("42", {42}),
        ("42, 43 ,44", {42, 43, 44}),
        ("42,,abc, -5", {42}),
    ],
)
def test_parse_user_ids(raw: str | None, expected: set[int]) -> None:
    assert parse_user_ids(raw) == expected


def test_empty_admin_list_privileges_nobody() -> None:
    gate = AuthorizationGate(parse_user_ids(None))

    assert not gate.is_privileged(42)


def test_gate_reflects_membership_changes() -> None:
    gate = AuthorizationGate({42})
    assert gate.is_privileged(42)
    assert not gate.is_privileged(7)

    gate.privileged_ids.discard(42)

    assert not gate.is_privileged(42)


def test_log_level_defaults_to_info(settings) -> None:
    assert settings.log_level == "INFO"
