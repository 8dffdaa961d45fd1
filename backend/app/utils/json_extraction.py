"""Locate and decode a JSON object inside free-form LLM output.

LLM responses wrap the requested JSON in markdown fences, prose preambles
or trailing chatter, and frequently break JSON syntax (smart quotes, trailing
commas, literal newlines inside HTML string values). This module provides:

- clean_response(): deterministic normalisation of the raw text
- extract_json_candidate(): five ordered pattern strategies, first non-empty
  match wins
- parse_json_object(): strict structural check plus json.loads, retried once
  after escaping raw control characters inside string values

ERROR LOGGING REQUIREMENTS:
- Log the winning strategy and candidate length at DEBUG level
- Log parse failures with a short snippet at DEBUG level
- Never log full responses above DEBUG
"""

import json
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from app.core.logging import get_logger, translation_logger

logger = get_logger(__name__)

_BLANK_LINE_PATTERN = re.compile(r"^\s*[\r\n]+", re.MULTILINE)
_TRAILING_COMMA_OBJECT = re.compile(r",\s*}")
_TRAILING_COMMA_ARRAY = re.compile(r",\s*]")
_SMART_DOUBLE_QUOTES = re.compile("[\u201c\u201d]")
_SMART_SINGLE_QUOTES = re.compile("[\u2018\u2019]")
_REPEATED_NEWLINES = re.compile(r"\n\s*\n")

_JSON_FENCE_PATTERN = re.compile(r"```json\s*(\{[\s\S]*?\})\s*```")
_ANY_FENCE_PATTERN = re.compile(r"```\s*(\{[\s\S]*?\})\s*```")
_PROSE_PREFIX_PATTERN = re.compile(
    r"(?:Here (?:is|are)|The translation (?:is|are)?:?\s*)?(\{[\s\S]*?\})(?:\s*\Z|\s*Here)"
)
_BALANCED_OBJECT_PATTERN = re.compile(r"\{(?:[^{}]|\{[^{}]*\})*\}")

_JSON_STRING_VALUE = re.compile(r'"(?:[^"\\]|\\.)*"')


def clean_response(raw: str) -> str:
    """Normalise raw model output before extraction.

    Steps run in a fixed order:
    1. drop whitespace-only lines
    2. remove trailing commas before } and ]
    3. replace smart quotes with ASCII quotes
    4. collapse runs of blank lines
    5. unescape literal \\n and \\" and collapse doubled backslashes
    """
    text = _BLANK_LINE_PATTERN.sub("", raw)
    text = _TRAILING_COMMA_OBJECT.sub("}", text)
    text = _TRAILING_COMMA_ARRAY.sub("]", text)
    text = _SMART_DOUBLE_QUOTES.sub('"', text)
    text = _SMART_SINGLE_QUOTES.sub("'", text)
    text = _REPEATED_NEWLINES.sub("\n", text)
    text = text.replace("\\n", "\n").replace('\\"', '"').replace("\\\\", "\\")
    return text.strip()


def _group_match(pattern: re.Pattern[str]) -> Callable[[str], str | None]:
    def _match(text: str) -> str | None:
        match = pattern.search(text)
        return match.group(1) if match else None

    return _match


def _largest_balanced_object(text: str) -> str | None:
    candidates = _BALANCED_OBJECT_PATTERN.findall(text)
    if not candidates:
        return None
    # max() keeps the first of equally long candidates
    return max(candidates, key=len)


def _outermost_braces(text: str) -> str | None:
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last <= first:
        return None
    return text[first : last + 1]


@dataclass(frozen=True)
class ExtractionStrategy:
    """A named way of locating a JSON candidate in text."""

    name: str
    locate: Callable[[str], str | None]


EXTRACTION_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    ExtractionStrategy("json_fence", _group_match(_JSON_FENCE_PATTERN)),
    ExtractionStrategy("any_fence", _group_match(_ANY_FENCE_PATTERN)),
    ExtractionStrategy("prose_prefix", _group_match(_PROSE_PREFIX_PATTERN)),
    ExtractionStrategy("largest_balanced", _largest_balanced_object),
    ExtractionStrategy("outermost_braces", _outermost_braces),
)


def extract_json_candidate(text: str) -> str | None:
    """Return the first non-empty candidate found by the ordered strategies.

    Returns None when no strategy matches.
    """
    for strategy in EXTRACTION_STRATEGIES:
        candidate = strategy.locate(text)
        if candidate:
            candidate = candidate.strip()
            translation_logger.strategy_matched(strategy.name, len(candidate))
            return candidate
    logger.debug("No JSON candidate found", extra={"text_length": len(text)})
    return None


def has_object_shape(candidate: str) -> bool:
    """Check the candidate starts with {, ends with } and has balanced braces."""
    return (
        candidate.startswith("{")
        and candidate.endswith("}")
        and candidate.count("{") == candidate.count("}")
    )


def _try_json_loads(text: str) -> dict[str, Any] | None:
    """Try json.loads, return None on failure."""
    try:
        result = json.loads(text)
        return result if isinstance(result, dict) else None
    except (json.JSONDecodeError, ValueError):
        return None


def _repair_json_control_chars(text: str) -> str:
    """Escape raw tabs and newlines that appear inside JSON string values."""

    def _escape_string_value(m: re.Match[str]) -> str:
        val: str = m.group(0)
        val = val.replace("\t", "\\t")
        return val.replace("\r\n", "\\n").replace("\r", "\\n").replace("\n", "\\n")

    return _JSON_STRING_VALUE.sub(_escape_string_value, text)


def parse_json_object(candidate: str) -> dict[str, Any] | None:
    """Decode a candidate into a dict, or None if it is not a JSON object."""
    if not has_object_shape(candidate):
        logger.debug(
            "Candidate is not object shaped",
            extra={"snippet": candidate[:100], "length": len(candidate)},
        )
        return None

    parsed = _try_json_loads(candidate)
    if parsed is None:
        parsed = _try_json_loads(_repair_json_control_chars(candidate))

    if parsed is None:
        logger.debug(
            "Candidate failed to decode",
            extra={"snippet": candidate[:300], "length": len(candidate)},
        )
    return parsed
