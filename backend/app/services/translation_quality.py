"""Quality check for recovered translation records.

Scoring starts at 100 and subtracts fixed penalties:
- title missing or shorter than 10 characters: -25
- content missing or shorter than 100 characters: -30
- record produced by the emergency tier: -40

The emergency penalty exists because a placeholder has a long enough title
and body to pass the length checks on its own. With it, a placeholder scores
60 and is always flagged for rework.

The score is clamped at 0 and a record passes at 70 or above. Records that
fail are still saved, flagged as needing rework.
"""

from dataclasses import dataclass, field

from app.services.translation_recovery import ExtractedRecord, Provenance

PASS_THRESHOLD = 70
MIN_TITLE_LENGTH = 10
MIN_CONTENT_LENGTH = 100

TITLE_PENALTY = 25
CONTENT_PENALTY = 30
EMERGENCY_PENALTY = 40

TITLE_WARNING = "Title is too short or empty"
CONTENT_WARNING = "Content is too short or empty"
EMERGENCY_WARNING = "Translation is an automatically generated placeholder"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the quality check."""

    score: int
    passed: bool
    warnings: list[str] = field(default_factory=list)


def validate_translation(record: ExtractedRecord) -> ValidationResult:
    """Score a record. Pure and deterministic."""
    score = 100
    warnings: list[str] = []

    if len(record.title or "") < MIN_TITLE_LENGTH:
        warnings.append(TITLE_WARNING)
        score -= TITLE_PENALTY

    if len(record.content or "") < MIN_CONTENT_LENGTH:
        warnings.append(CONTENT_WARNING)
        score -= CONTENT_PENALTY

    if record.provenance == Provenance.EMERGENCY:
        warnings.append(EMERGENCY_WARNING)
        score -= EMERGENCY_PENALTY

    score = max(0, score)
    return ValidationResult(score=score, passed=score >= PASS_THRESHOLD, warnings=warnings)
