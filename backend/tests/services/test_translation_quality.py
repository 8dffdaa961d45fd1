"""Tests for translation quality scoring."""

from app.services.translation_quality import (
    CONTENT_WARNING,
    EMERGENCY_WARNING,
    PASS_THRESHOLD,
    TITLE_WARNING,
    validate_translation,
)
from app.services.translation_recovery import (
    ExtractedRecord,
    Provenance,
    SourceContent,
    build_emergency_record,
)

GOOD_CONTENT = "<p>" + "Finansielle institutioner skal overholde reglerne. " * 4 + "</p>"


def _record(
    title: str = "EU-compliance guide for banker",
    content: str = GOOD_CONTENT,
    provenance: Provenance = Provenance.PARSED,
) -> ExtractedRecord:
    return ExtractedRecord(
        title=title,
        content=content,
        excerpt="En praktisk guide",
        meta_title="",
        meta_description="",
        meta_keywords="",
        slug="eu-guide-danish",
        provenance=provenance,
    )


class TestValidateTranslation:
    """Tests for validate_translation."""

    def test_good_record_scores_full_marks(self) -> None:
        result = validate_translation(_record())

        assert result.score == 100
        assert result.passed is True
        assert result.warnings == []

    def test_short_title(self) -> None:
        result = validate_translation(_record(title="Kort"))

        assert result.score == 75
        assert result.passed is True
        assert result.warnings == [TITLE_WARNING]

    def test_short_content(self) -> None:
        result = validate_translation(_record(content="<p>Kort</p>"))

        assert result.score == 70
        assert result.passed is True
        assert result.warnings == [CONTENT_WARNING]

    def test_short_title_and_content_fail(self) -> None:
        result = validate_translation(_record(title="", content=""))

        assert result.score == 45
        assert result.passed is False
        assert result.warnings == [TITLE_WARNING, CONTENT_WARNING]

    def test_emergency_record_fails(self) -> None:
        source = SourceContent(
            id="p1",
            title="EU Compliance Guide for Banks",
            content="<p>x</p>",
            excerpt="Guide",
            slug="eu-guide",
        )

        result = validate_translation(build_emergency_record(source, "da"))

        assert result.score == 60
        assert result.passed is False
        assert result.warnings == [EMERGENCY_WARNING]

    def test_all_penalties_combine(self) -> None:
        result = validate_translation(
            _record(title="", content="", provenance=Provenance.EMERGENCY)
        )

        assert result.score == 5
        assert result.passed is False
        assert len(result.warnings) == 3

    def test_threshold_boundary(self) -> None:
        assert PASS_THRESHOLD == 70
        assert validate_translation(_record(content="")).passed is True

    def test_is_deterministic(self) -> None:
        record = _record(title="Kort")
        assert validate_translation(record) == validate_translation(record)

