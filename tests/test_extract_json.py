"""Tests for model-output JSON extraction."""

from __future__ import annotations

import pytest

from restyle.agents.base import decode_json_object, extract_json
from restyle.shared.errors import ResponseShapeError


class TestExtractJson:
    def test_plain_text_is_trimmed(self) -> None:
        assert extract_json('  {"a": 1}\n') == '{"a": 1}'

    def test_json_fence(self) -> None:
        assert extract_json('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self) -> None:
        assert extract_json('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_fence_with_surrounding_prose(self) -> None:
        text = 'Here you go:\n```JSON\n{"a": 1}\n```\nEnjoy!'
        assert extract_json(text) == '{"a": 1}'

    def test_first_fence_wins(self) -> None:
        text = '```json\n{"a": 1}\n```\n```json\n{"b": 2}\n```'
        assert extract_json(text) == '{"a": 1}'

    def test_not_validated(self) -> None:
        assert extract_json("not json at all") == "not json at all"

    def test_empty(self) -> None:
        assert extract_json("   ") == ""


class TestDecodeJsonObject:
    def test_fenced_object(self) -> None:
        assert decode_json_object('```json\n{"colors": ["#fff"]}\n```') == {"colors": ["#fff"]}

    def test_trailing_prose(self) -> None:
        assert decode_json_object('{"a": 1}\nHope this helps!') == {"a": 1}

    def test_leading_prose(self) -> None:
        assert decode_json_object('Sure! {"a": 1}') == {"a": 1}

    def test_invalid_json(self) -> None:
        with pytest.raises(ResponseShapeError):
            decode_json_object("I cannot help with that.")

    def test_non_object(self) -> None:
        with pytest.raises(ResponseShapeError, match="Expected a JSON object"):
            decode_json_object("[1, 2, 3]")

    def test_shape_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            decode_json_object("")
