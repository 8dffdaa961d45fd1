"""Tests for the three-tier translation record recovery.

Tests cover:
- Parsed tier: fenced JSON, slug derivation, optional field defaults
- Reconstructed tier: truncated or undecodable JSON
- Emergency tier: refusals and garbage output
- recover_record never raises and always fills primary fields
"""

import json

import pytest

from app.services.translation_recovery import (
    PRIMARY_FIELDS,
    Provenance,
    RecoveryInput,
    ReconstructedTier,
    SourceContent,
    build_emergency_record,
    derive_slug,
    reconstruct_fields,
    recover_record,
)

LONG_DANISH_CONTENT = (
    "<h2>Hvorfor compliance er vigtigt</h2>"
    "<p>Finansielle institutioner i hele EU skal overholde strenge regler for "
    "rapportering. Denne guide forklarer, hvordan du forbereder dit team.</p>"
)


@pytest.fixture
def source() -> SourceContent:
    return SourceContent(
        id="post-1",
        title="EU Compliance Guide for Banks",
        content="<p>Financial institutions across the EU must follow strict rules.</p>",
        excerpt="A practical guide to EU compliance for financial teams.",
        slug="eu-compliance-guide",
    )


def _fenced(payload: dict) -> str:
    return "<thinking>\nPlan the tone.\n</thinking>\n```json\n" + json.dumps(payload) + "\n```"


class TestDeriveSlug:
    """Tests for slug selection."""

    def test_model_slug_wins(self, source: SourceContent) -> None:
        assert derive_slug("eu-overholdelse", source, "da") == "eu-overholdelse"

    def test_falls_back_to_source_slug_and_language_name(self, source: SourceContent) -> None:
        assert derive_slug(None, source, "da") == "eu-compliance-guide-danish"
        assert derive_slug("", source, "de-AT") == "eu-compliance-guide-german"

    def test_unknown_language_uses_code(self, source: SourceContent) -> None:
        assert derive_slug(None, source, "xx") == "eu-compliance-guide-xx"


class TestParsedTier:
    """Well-formed responses decode as a whole."""

    def test_fenced_json_is_parsed(self, source: SourceContent) -> None:
        raw = _fenced(
            {
                "title": "EU-compliance guide for banker",
                "content": LONG_DANISH_CONTENT,
                "excerpt": "En praktisk guide",
                "meta_title": "EU-compliance for banker",
                "meta_description": "Alt om EU-compliance",
                "meta_keywords": "compliance, Danmark",
                "cultural_adaptations": "Brugte Finanstilsynet som eksempel",
            }
        )

        record = recover_record(raw, source, "da")

        assert record.provenance == Provenance.PARSED
        assert record.title == "EU-compliance guide for banker"
        assert record.content == LONG_DANISH_CONTENT
        assert record.meta_keywords == "compliance, Danmark"
        assert record.cultural_adaptations == "Brugte Finanstilsynet som eksempel"
        assert record.slug == "eu-compliance-guide-danish"

    def test_model_slug_is_kept(self, source: SourceContent) -> None:
        raw = _fenced(
            {
                "title": "Titel",
                "content": "<p>Tekst</p>",
                "excerpt": "Kort",
                "slug": "eu-guide-dk",
            }
        )

        record = recover_record(raw, source, "da")

        assert record.provenance == Provenance.PARSED
        assert record.slug == "eu-guide-dk"

    def test_missing_optional_fields_become_empty(self, source: SourceContent) -> None:
        raw = _fenced({"title": "Titel", "content": "<p>Tekst</p>", "excerpt": "Kort"})

        record = recover_record(raw, source, "da")

        assert record.meta_title == ""
        assert record.meta_description == ""
        assert record.meta_keywords == ""
        assert record.cultural_adaptations == ""

    def test_escaped_attribute_quotes_survive(self, source: SourceContent) -> None:
        content = (
            '<p>Se <a href="https://example.com/guide" class="link">guiden</a> '
            'for detaljer.</p>'
        )
        raw = _fenced({"title": "Titel", "content": content, "excerpt": "Kort"})
        assert '\\"https:' in raw

        record = recover_record(raw, source, "da")

        assert record.provenance == Provenance.PARSED
        assert record.content == content

    def test_list_values_are_joined(self, source: SourceContent) -> None:
        raw = _fenced(
            {
                "title": "Titel",
                "content": "<p>Tekst</p>",
                "excerpt": "Kort",
                "meta_keywords": ["compliance", "Danmark", "Finanstilsynet"],
            }
        )

        record = recover_record(raw, source, "da")

        assert record.provenance == Provenance.PARSED
        assert record.meta_keywords == "compliance, Danmark, Finanstilsynet"


class TestReconstructedTier:
    """Malformed responses are rebuilt field by field."""

    def test_missing_closing_brace(self, source: SourceContent) -> None:
        raw = (
            '{"title": "EU-compliance guide for banker", '
            f'"content": "{LONG_DANISH_CONTENT}", '
            '"excerpt": "En praktisk guide", '
            '"meta_title": "EU-compliance"'
        )

        record = recover_record(raw, source, "da")

        assert record.provenance == Provenance.RECONSTRUCTED
        assert record.title == "EU-compliance guide for banker"
        assert record.content == LONG_DANISH_CONTENT
        assert record.excerpt == "En praktisk guide"
        assert record.meta_title == "EU-compliance"
        assert record.meta_description == ""
        assert record.slug == "eu-compliance-guide-danish"

    def test_unescaped_quote_inside_object(self, source: SourceContent) -> None:
        raw = (
            'Here is the translation: {"title": "Guide til banker", '
            '"content": "<p>Han sagde "hej"</p>", "excerpt": "Kort resume"}'
        )

        record = recover_record(raw, source, "da")

        assert record.provenance == Provenance.RECONSTRUCTED
        assert record.title == "Guide til banker"
        assert record.content == "<p>Han sagde "

    def test_requires_title_content_and_excerpt(self) -> None:
        assert reconstruct_fields('{"title": "Only a title"') is None
        assert reconstruct_fields('"title": "T", "content": "C"') is None

    def test_tier_reads_cleaned_text_without_candidate(self, source: SourceContent) -> None:
        recovery_input = RecoveryInput.from_raw(
            '"title": "Titel", "content": "<p>Tekst</p>", "excerpt": "Kort"',
            source,
            "sv",
        )

        assert recovery_input.candidate is None
        record = ReconstructedTier().try_extract(recovery_input)

        assert record is not None
        assert record.slug == "eu-compliance-guide-swedish"


class TestEmergencyTier:
    """Unusable responses fall back to a placeholder."""

    def test_refusal_produces_placeholder(self, source: SourceContent) -> None:
        record = recover_record("I'm sorry, I cannot translate this.", source, "da")

        assert record.provenance == Provenance.EMERGENCY
        assert record.title == "Danish Translation - EU Compliance Guide for Banks"
        assert "EU Compliance Guide for Banks" in record.content
        assert record.slug == "eu-compliance-guide-danish"
        assert "requires manual review" in record.cultural_adaptations

    def test_unknown_language_uses_code_as_name(self, source: SourceContent) -> None:
        record = build_emergency_record(source, "xx")

        assert record.title.startswith("xx Translation - ")
        assert record.slug == "eu-compliance-guide-xx"

    def test_empty_excerpt_uses_title(self, source: SourceContent) -> None:
        bare = SourceContent(
            id=source.id,
            title=source.title,
            content=source.content,
            excerpt="",
            slug=source.slug,
        )

        record = build_emergency_record(bare, "fi")

        assert record.excerpt == "Finnish translation of: EU Compliance Guide for Banks..."

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "}}}{{{",
            '{"title": ',
            "```json\n[1, 2, 3]\n```",
            "\\n\\n\\n",
        ],
    )
    def test_never_raises_and_fills_primary_fields(
        self, source: SourceContent, raw: str
    ) -> None:
        record = recover_record(raw, source, "fr")

        for name in PRIMARY_FIELDS:
            assert getattr(record, name), f"{name} should not be empty"
        assert record.slug
