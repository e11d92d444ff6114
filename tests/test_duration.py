"""Tests for hunt timer compaction."""

from __future__ import annotations

import pytest

from packages.core.horn.duration import compact
from packages.core.horn.errors import UnrecognizedPayload


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2:45", "3m"),
        ("2:15", "2m"),
        ("2:30", "2m"),
        ("2:31", "3m"),
        ("14:59", "15m"),
        ("1:00", "1m"),
        ("45", "45s"),
        ("0:45", "45s"),
        ("59", "59s"),
        ("5 min", "5m"),
        ("15 mins", "15m"),
    ],
)
def test_compact_examples(raw: str, expected: str) -> None:
    assert compact(raw) == expected


def test_compact_seconds_token_reparses_to_same_value() -> None:
    for n in range(0, 60):
        token = compact(str(n))
        assert token == f"{n}s"
        assert compact(token.rstrip("s")) == token


def test_compact_rejects_text_without_a_number() -> None:
    with pytest.raises(UnrecognizedPayload):
        compact("Soon")


def test_unrecognized_payload_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        compact("")
