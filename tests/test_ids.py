# tests/test_ids.py
"""Tests for object id helpers."""

import pytest

from chat_app.utils.ids import is_object_id, new_object_id, parse_object_id


def test_new_object_ids_are_unique_hex() -> None:
    ids = {new_object_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(len(value) == 24 and is_object_id(value) for value in ids)


def test_parse_normalizes_case() -> None:
    assert parse_object_id("ABCDEF0123456789ABCDEF01") == "abcdef0123456789abcdef01"


@pytest.mark.parametrize(
    "value",
    ["", "abc", "g" * 24, "a" * 25, "aa bb cc dd ee ff 00 11 22", "a" * 23 + "\n"],
)
def test_parse_rejects_malformed(value: str) -> None:
    with pytest.raises(ValueError):
        parse_object_id(value)
    assert not is_object_id(value)
