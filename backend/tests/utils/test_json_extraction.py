"""Tests for locating and decoding JSON in LLM output.

Tests cover:
- clean_response: blank lines, trailing commas, smart quotes, unescaping
- extract_json_candidate: each strategy and their priority order
- parse_json_object: structural checks and the control character retry
"""

import json

from app.utils.json_extraction import (
    EXTRACTION_STRATEGIES,
    clean_response,
    extract_json_candidate,
    has_object_shape,
    parse_json_object,
)


def _strategy(name: str):
    return next(s for s in EXTRACTION_STRATEGIES if s.name == name)


class TestCleanResponse:
    """Tests for deterministic response cleaning."""

    def test_removes_blank_lines(self) -> None:
        assert clean_response("line1\n\n   \nline2") == "line1\nline2"

    def test_removes_trailing_commas(self) -> None:
        assert clean_response('{"a": [1, 2,], "b": 1,}') == '{"a": [1, 2], "b": 1}'

    def test_replaces_smart_quotes(self) -> None:
        raw = "\u201ctitle\u201d: \u201cDon\u2019t\u201d"
        assert clean_response(raw) == "\"title\": \"Don't\""

    def test_unescapes_literal_sequences(self) -> None:
        """Literal \\n and \\" become real characters, doubled backslashes collapse."""
        assert clean_response("a\\nb") == "a\nb"
        assert clean_response('say \\"hej\\"') == 'say "hej"'
        assert clean_response("C:\\\\path") == "C:\\path"

    def test_strips_surrounding_whitespace(self) -> None:
        assert clean_response("   {}   \n") == "{}"

    def test_is_deterministic(self) -> None:
        raw = "```json\n{\u201ctitle\u201d: \u201cX\u201d,}\n```"
        assert clean_response(raw) == clean_response(raw)


class TestExtractJsonCandidate:
    """Tests for the ordered extraction strategies."""

    def test_json_fence_wins_over_earlier_object(self) -> None:
        text = 'Draft {"a": 1} first.\n```json\n{"title": "A"}\n```'
        assert extract_json_candidate(text) == '{"title": "A"}'

    def test_plain_fence(self) -> None:
        text = 'Result:\n```\n{"title": "B"}\n```\nDone.'
        assert extract_json_candidate(text) == '{"title": "B"}'

    def test_prose_prefixed_object(self) -> None:
        text = 'Here is the translation: {"title": "C", "excerpt": "Kort"}'
        assert extract_json_candidate(text) == '{"title": "C", "excerpt": "Kort"}'

    def test_object_followed_by_more_prose(self) -> None:
        text = 'The translation is: {"title": "C"} Here are my notes.'
        assert extract_json_candidate(text) == '{"title": "C"}'

    def test_largest_balanced_object_wins(self) -> None:
        text = 'Note {"a": 1} and {"title": "D", "meta": {"k": "v"}} trailing words'
        assert extract_json_candidate(text) == '{"title": "D", "meta": {"k": "v"}}'

    def test_largest_balanced_keeps_first_of_equal_length(self) -> None:
        locate = _strategy("largest_balanced").locate
        assert locate('{"a": 1} x {"b": 2} y') == '{"a": 1}'

    def test_outermost_braces(self) -> None:
        locate = _strategy("outermost_braces").locate
        assert locate('junk {"title": {"x": 1 } tail') == '{"title": {"x": 1 }'
        assert locate("} backwards {") is None

    def test_returns_none_without_braces(self) -> None:
        assert extract_json_candidate("I'm sorry, I cannot translate this.") is None

    def test_strategy_order(self) -> None:
        assert [s.name for s in EXTRACTION_STRATEGIES] == [
            "json_fence",
            "any_fence",
            "prose_prefix",
            "largest_balanced",
            "outermost_braces",
        ]


class TestParseJsonObject:
    """Tests for the parse attempt on a candidate."""

    def test_parses_valid_object(self) -> None:
        candidate = json.dumps({"title": "Titel", "content": "<p>Tekst</p>"})
        assert parse_json_object(candidate) == {"title": "Titel", "content": "<p>Tekst</p>"}

    def test_rejects_unbalanced_braces(self) -> None:
        assert has_object_shape('{"a": "}"}') is False
        assert parse_json_object('{"a": "}"}') is None

    def test_rejects_non_object(self) -> None:
        assert parse_json_object("[1, 2, 3]") is None

    def test_rejects_invalid_json(self) -> None:
        assert parse_json_object("{title: no quotes}") is None

    def test_repairs_raw_newlines_in_strings(self) -> None:
        """Literal newlines inside HTML values are escaped and retried."""
        candidate = '{"content": "<p>a</p>\n<p>b</p>", "title": "T"}'
        result = parse_json_object(candidate)
        assert result is not None
        assert result["content"] == "<p>a</p>\n<p>b</p>"
