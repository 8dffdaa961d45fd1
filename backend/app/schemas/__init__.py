"""Schemas layer - Pydantic models for API validation.

Schemas define the shape of data for API requests and responses.
They handle validation, serialization, and documentation.
"""

from app.schemas.translation import (
    PostTranslationResponse,
    TranslatePostRequest,
    TranslatePostResponse,
    TranslationErrorResponse,
    TranslationOutcomeResponse,
    TranslationPublishUpdate,
)

__all__ = [
    "PostTranslationResponse",
    "TranslatePostRequest",
    "TranslatePostResponse",
    "TranslationErrorResponse",
    "TranslationOutcomeResponse",
    "TranslationPublishUpdate",
]
