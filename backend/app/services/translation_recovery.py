"""Recover a structured translation record from raw LLM output.

Recovery escalates through three tiers, each a RecoveryTier with the same
try_extract() signature:

1. ParsedTier: clean -> extract a JSON candidate -> decode it
2. ReconstructedTier: per-field regex capture on the candidate (or on the
   cleaned text when no candidate was found), with a manual scan for the
   HTML content value
3. EmergencyTier: placeholder record built from the source post; never fails

The first tier that returns a record wins. Every record carries the
provenance of the tier that produced it.

ERROR LOGGING REQUIREMENTS:
- Log the recovery tier used at INFO (parsed) or WARNING (degraded) level
- Log reconstruction misses with the fields that were found at DEBUG level
- Never log full model responses above DEBUG
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from app.core.logging import get_logger, translation_logger
from app.utils.json_extraction import (
    clean_response,
    extract_json_candidate,
    parse_json_object,
)
from app.utils.languages import language_display_name

logger = get_logger(__name__)

PRIMARY_FIELDS = (
    "title",
    "content",
    "excerpt",
    "meta_title",
    "meta_description",
    "meta_keywords",
)

# Fields captured by regex; content is handled by _scan_content_value
_REGEX_FIELDS = (
    "title",
    "excerpt",
    "meta_title",
    "meta_description",
    "meta_keywords",
    "cultural_adaptations",
)

_CONTENT_START_PATTERN = re.compile(r'"content"\s*:\s*"')


class Provenance(str, Enum):
    """Which recovery tier produced a record."""

    PARSED = "parsed"
    RECONSTRUCTED = "reconstructed"
    EMERGENCY = "emergency"


@dataclass(frozen=True)
class SourceContent:
    """The source post as seen by the translation pipeline."""

    id: str
    title: str
    content: str
    excerpt: str
    slug: str
    localization_notes: str | None = None


@dataclass(frozen=True)
class ExtractedRecord:
    """A complete translation record. Primary fields are never None."""

    title: str
    content: str
    excerpt: str
    meta_title: str
    meta_description: str
    meta_keywords: str
    slug: str
    provenance: Provenance
    cultural_adaptations: str = ""


def derive_slug(model_slug: str | None, source: SourceContent, language_code: str) -> str:
    """Use the model's slug when given, else '<source slug>-<language name>'."""
    if model_slug:
        return model_slug
    return f"{source.slug}-{language_display_name(language_code).lower()}"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(_as_text(item) for item in value)
    return value if isinstance(value, str) else str(value)


def _unescape(value: str) -> str:
    return value.replace('\\"', '"').replace("\\n", "\n")


def _field_pattern(field_name: str) -> re.Pattern[str]:
    return re.compile(rf'"{field_name}"\s*:\s*"((?:[^"\\]|\\.)*)"', re.DOTALL)


_FIELD_PATTERNS = {name: _field_pattern(name) for name in _REGEX_FIELDS}


def _scan_content_value(text: str) -> str:
    """Read the content value up to the first unescaped quote at brace depth 0."""
    match = _CONTENT_START_PATTERN.search(text)
    if not match:
        return ""

    start = match.end()
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == '"' and text[index - 1] != "\\" and depth == 0:
            return text[start:index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
    return ""


def reconstruct_fields(text: str) -> dict[str, str] | None:
    """Capture each field individually from malformed JSON-like text.

    Returns None unless title, content and excerpt are all non-empty.
    Optional fields that are missing come back as empty strings.
    """
    fields: dict[str, str] = {}
    for name, pattern in _FIELD_PATTERNS.items():
        match = pattern.search(text)
        fields[name] = _unescape(match.group(1)) if match else ""
    fields["content"] = _unescape(_scan_content_value(text))

    if not (fields["title"] and fields["content"] and fields["excerpt"]):
        logger.debug(
            "Field reconstruction incomplete",
            extra={
                "found_fields": sorted(k for k, v in fields.items() if v),
                "text_length": len(text),
            },
        )
        return None
    return fields


def build_emergency_record(source: SourceContent, language_code: str) -> ExtractedRecord:
    """Placeholder record that needs manual editing. Never raises."""
    lang_name = language_display_name(language_code)
    title = source.title or ""
    summary = (source.excerpt or "")[:100] or title

    return ExtractedRecord(
        title=f"{lang_name} Translation - {title}",
        content=(
            f"<h2>{lang_name} Translation</h2>"
            "<p>This is an automatically generated placeholder. The AI translation "
            "failed, please edit this content manually.</p>"
            f"<p>Original title: {title}</p>"
        ),
        excerpt=f"{lang_name} translation of: {summary}...",
        meta_title=f"{lang_name}: {title}",
        meta_description=f"{lang_name} translation - {summary}",
        meta_keywords=f"{lang_name} translation, EU compliance",
        cultural_adaptations=(
            f"Emergency fallback translation for {lang_name} - "
            "requires manual review and editing"
        ),
        slug=derive_slug(None, source, language_code),
        provenance=Provenance.EMERGENCY,
    )


@dataclass(frozen=True)
class RecoveryInput:
    """Raw model output, its cleaned form and the located JSON candidates.

    raw_candidate is located in the uncleaned text so that valid JSON keeps
    its escaped quotes (HTML attributes) when decoded.
    """

    raw: str
    cleaned: str
    candidate: str | None
    source: SourceContent
    language_code: str
    raw_candidate: str | None = None

    @classmethod
    def from_raw(cls, raw: str, source: SourceContent, language_code: str) -> "RecoveryInput":
        cleaned = clean_response(raw)
        return cls(
            raw=raw,
            cleaned=cleaned,
            candidate=extract_json_candidate(cleaned),
            source=source,
            language_code=language_code,
            raw_candidate=extract_json_candidate(raw.strip()),
        )


class RecoveryTier(Protocol):
    """One step of the recovery escalation."""

    name: str

    def try_extract(self, recovery_input: RecoveryInput) -> ExtractedRecord | None:
        ...


class ParsedTier:
    """Decode the located JSON candidate as a whole."""

    name = Provenance.PARSED.value

    def try_extract(self, recovery_input: RecoveryInput) -> ExtractedRecord | None:
        parsed = None
        # Uncleaned first: cleaning unescapes \" inside valid JSON strings
        for candidate in (recovery_input.raw_candidate, recovery_input.candidate):
            if candidate is not None:
                parsed = parse_json_object(candidate)
                if parsed is not None:
                    break
        if parsed is None:
            return None

        return ExtractedRecord(
            **{name: _as_text(parsed.get(name)) for name in PRIMARY_FIELDS},
            cultural_adaptations=_as_text(parsed.get("cultural_adaptations")),
            slug=derive_slug(
                _as_text(parsed.get("slug")),
                recovery_input.source,
                recovery_input.language_code,
            ),
            provenance=Provenance.PARSED,
        )


class ReconstructedTier:
    """Capture fields one by one from text that would not decode."""

    name = Provenance.RECONSTRUCTED.value

    def try_extract(self, recovery_input: RecoveryInput) -> ExtractedRecord | None:
        text = recovery_input.candidate
        if text is None:
            text = recovery_input.cleaned
        fields = reconstruct_fields(text)
        if fields is None:
            return None

        return ExtractedRecord(
            title=fields["title"],
            content=fields["content"],
            excerpt=fields["excerpt"],
            meta_title=fields["meta_title"],
            meta_description=fields["meta_description"],
            meta_keywords=fields["meta_keywords"],
            cultural_adaptations=fields["cultural_adaptations"],
            slug=derive_slug(None, recovery_input.source, recovery_input.language_code),
            provenance=Provenance.RECONSTRUCTED,
        )


class EmergencyTier:
    """Build the placeholder record from the source post."""

    name = Provenance.EMERGENCY.value

    def try_extract(self, recovery_input: RecoveryInput) -> ExtractedRecord:
        return build_emergency_record(recovery_input.source, recovery_input.language_code)


RECOVERY_TIERS: tuple[RecoveryTier, ...] = (
    ParsedTier(),
    ReconstructedTier(),
    EmergencyTier(),
)


def recover_record(raw: str, source: SourceContent, language_code: str) -> ExtractedRecord:
    """Run the tiers in order and return the first record produced.

    The emergency tier always succeeds, so this never returns None.
    """
    recovery_input = RecoveryInput.from_raw(raw, source, language_code)

    for tier in RECOVERY_TIERS:
        record = tier.try_extract(recovery_input)
        if record is not None:
            translation_logger.recovery_tier(
                language_code, record.provenance.value, len(record.content)
            )
            return record

    # EmergencyTier is last and always returns a record
    raise RuntimeError("No recovery tier produced a record")
