"""Pydantic v2 schemas for the post translation API.

The translate-post endpoint speaks camelCase on the wire:
- TranslatePostRequest: postId, targetLanguages, translationProvider, model,
  localizationNotes
- TranslationOutcomeResponse: one entry per requested language
- TranslatePostResponse / TranslationErrorResponse: success and failure bodies

Translation management schemas use the snake_case column names.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class TranslatePostRequest(BaseModel):
    """Request schema for translating a post into several languages."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    post_id: str = Field(..., min_length=1, description="UUID of the source post")
    target_languages: list[str] = Field(
        ...,
        min_length=1,
        description="Target language codes, processed in order (e.g. da, sv, de-AT)",
    )
    translation_provider: Literal["claude", "openai"] = Field(
        ..., description="LLM provider to translate with"
    )
    model: str | None = Field(
        None, description="Claude model override; must be on the allow-list"
    )
    localization_notes: str | None = Field(
        None, description="Notes for the translator, overriding the post's own notes"
    )

    @field_validator("target_languages")
    @classmethod
    def strip_language_codes(cls, v: list[str]) -> list[str]:
        codes = [code.strip() for code in v]
        if any(not code for code in codes):
            raise ValueError("Language codes cannot be empty")
        return codes


class TranslationOutcomeResponse(BaseModel):
    """Outcome for one language. Fields not relevant to the status are omitted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    language_code: str
    status: Literal["completed", "skipped", "error"]
    translation_id: str | None = None
    quality_score: int | None = None
    warnings: list[str] | None = None
    provenance: Literal["parsed", "reconstructed", "emergency"] | None = None
    reason: str | None = None
    error: str | None = None


class TranslatePostResponse(BaseModel):
    """Response schema for a finished translation batch."""

    success: bool = True
    results: list[TranslationOutcomeResponse]


class TranslationErrorResponse(BaseModel):
    """Response schema for a request that could not start."""

    success: bool = False
    error: str
    details: str | None = None


class PostTranslationResponse(BaseModel):
    """Response schema for a stored translation."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Translation UUID")
    post_id: str = Field(..., description="Source post UUID")
    language_code: str
    title: str
    content: str
    excerpt: str
    meta_title: str
    meta_description: str
    meta_keywords: str
    slug: str
    cultural_adaptations: str | None = None
    translation_status: str
    localization_status: str
    quality_score: int | None = None
    quality_warnings: list[str] | None = None
    provenance: str | None = None
    published: bool
    created_at: datetime
    updated_at: datetime


class TranslationPublishUpdate(BaseModel):
    """Request schema for toggling a translation's published flag."""

    published: bool = Field(..., description="Whether the translation should be live")
