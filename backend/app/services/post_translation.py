"""Post translation orchestration.

Translates one source post into a list of target languages, one language at
a time:

1. A completed translation already on file is skipped (no model call, no write)
2. Any other existing translation is deleted before retranslating
3. The provider is called once with the translation prompt
4. Responses that report their own truncation are rejected
5. The record is recovered from the raw response (parsed / reconstructed /
   emergency) and scored
6. The row is inserted only once the full record exists

Invocation-level problems (unknown model, missing post, missing credentials)
raise and abort the whole request. Everything that goes wrong for a single
language becomes an error outcome for that language and the batch continues.

ERROR LOGGING REQUIREMENTS:
- Log batch start/completion at INFO level with counts and timing
- Log every per-language failure with full stack trace and context
- Include entity IDs (post_id, translation_id) and language_code in all logs
- Never log API keys
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import transaction
from app.core.logging import get_logger, mask_api_key, translation_logger
from app.integrations.base import BaseLLMClient
from app.integrations.claude import ClaudeClient
from app.integrations.openai import OpenAIClient
from app.models.post import Post
from app.models.post_translation import LocalizationStatus, TranslationStatus
from app.repositories.api_setting import ApiSettingRepository
from app.repositories.post import PostRepository
from app.repositories.post_translation import PostTranslationRepository
from app.services.translation_prompt import (
    build_translation_prompt,
    resolve_localization_notes,
)
from app.services.translation_quality import validate_translation
from app.services.translation_recovery import SourceContent, recover_record

logger = get_logger(__name__)

Provider = Literal["claude", "openai"]

API_KEY_SETTINGS: dict[str, str] = {
    "claude": "claude_api_key",
    "openai": "openai_api_key",
}

TRUNCATION_MARKERS = (
    "[content continues",
    "[resten af",
    "[due to length",
    "truncated",
    "shortened",
)

ALREADY_COMPLETED_REASON = "Translation already completed"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class TranslationError(Exception):
    """Base exception for translation errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidModelError(TranslationError):
    """Raised when the requested model is not on the allow-list."""

    pass


class PostNotFoundError(TranslationError):
    """Raised when the source post does not exist."""

    pass


class MissingCredentialsError(TranslationError):
    """Raised when the provider API key is missing or inactive."""

    pass


class SourceContentError(TranslationError):
    """Raised when the source post lacks a title or content."""

    pass


class ProviderCallError(TranslationError):
    """Raised when the provider call fails."""

    pass


class TruncatedResponseError(TranslationError):
    """Raised when the model reports that it truncated its output."""

    pass


# =============================================================================
# DATA TYPES
# =============================================================================


@dataclass(frozen=True)
class TranslationRequest:
    """One translate-post invocation."""

    post_id: str
    target_languages: tuple[str, ...]
    provider: Provider
    model: str | None = None
    localization_notes: str | None = None


class OutcomeStatus(str, Enum):
    """Terminal state of one language in a batch."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class LanguageOutcome:
    """Result for one target language."""

    language_code: str
    status: OutcomeStatus
    translation_id: str | None = None
    quality_score: int | None = None
    warnings: list[str] = field(default_factory=list)
    provenance: str | None = None
    reason: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert outcome to its camelCase wire shape."""
        result: dict[str, Any] = {
            "languageCode": self.language_code,
            "status": self.status.value,
        }
        if self.status == OutcomeStatus.COMPLETED:
            result.update(
                translationId=self.translation_id,
                qualityScore=self.quality_score,
                warnings=list(self.warnings),
                provenance=self.provenance,
            )
        elif self.status == OutcomeStatus.SKIPPED:
            result.update(reason=self.reason, translationId=self.translation_id)
        else:
            result["error"] = self.error
        return result


ClientFactory = Callable[[str, str, str], BaseLLMClient]


def create_llm_client(provider: str, api_key: str, model: str) -> BaseLLMClient:
    """Build the provider client for one batch."""
    if provider == "claude":
        return ClaudeClient(api_key=api_key, model=model)
    if provider == "openai":
        return OpenAIClient(api_key=api_key, model=model)
    raise TranslationError(f"Unsupported translation provider: {provider}")


def find_truncation_marker(text: str) -> str | None:
    """Return the first truncation marker present in the text, if any."""
    for marker in TRUNCATION_MARKERS:
        if marker in text:
            return marker
    return None


def source_from_post(post: Post) -> SourceContent:
    return SourceContent(
        id=post.id,
        title=post.title or "",
        content=post.content or "",
        excerpt=post.excerpt or "",
        slug=post.slug or "",
        localization_notes=post.localization_notes,
    )


# =============================================================================
# SERVICE
# =============================================================================


class PostTranslationService:
    """Runs translation batches for posts.

    Each language's delete and insert are committed on their own, so a
    failure in one language never undoes another language's result.
    """

    def __init__(
        self,
        session: AsyncSession,
        client_factory: ClientFactory = create_llm_client,
    ) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.translations = PostTranslationRepository(session)
        self.api_settings = ApiSettingRepository(session)
        self._client_factory = client_factory

    def resolve_model(self, request: TranslationRequest) -> str:
        """Pick the model for the request, enforcing the Claude allow-list."""
        settings = get_settings()
        if request.provider == "claude":
            allowed = settings.claude_allowed_models
            if request.model and request.model not in allowed:
                raise InvalidModelError(
                    f"Invalid model: {request.model}. "
                    f"Allowed models: {', '.join(allowed)}"
                )
            return request.model or settings.claude_model
        return settings.openai_model

    async def _load_source(self, post_id: str) -> SourceContent:
        post = await self.posts.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError("Post not found", details=f"post_id={post_id}")
        return source_from_post(post)

    async def _load_api_key(self, provider: str) -> str:
        setting_name = API_KEY_SETTINGS[provider]
        api_key = await self.api_settings.get_active_value(setting_name)
        if not api_key:
            raise MissingCredentialsError(
                f"{provider} API key not configured or inactive",
                details=f"Set an active '{setting_name}' in API settings",
            )
        logger.debug(
            "Loaded provider API key",
            extra={"provider": provider, "api_key": mask_api_key(api_key)},
        )
        return api_key

    async def translate_post(self, request: TranslationRequest) -> list[LanguageOutcome]:
        """Translate a post into every requested language.

        Returns exactly one outcome per requested language, in request order.

        Raises:
            InvalidModelError: Model not allowed for the provider
            PostNotFoundError: Source post does not exist
            MissingCredentialsError: No active API key for the provider
        """
        start_time = time.monotonic()
        model = self.resolve_model(request)
        source = await self._load_source(request.post_id)
        api_key = await self._load_api_key(request.provider)
        notes = resolve_localization_notes(request.localization_notes, source)

        translation_logger.batch_start(
            request.post_id, list(request.target_languages), request.provider, model
        )

        outcomes: list[LanguageOutcome] = []
        async with self._client_factory(request.provider, api_key, model) as client:
            for language_code in request.target_languages:
                outcome = await self._translate_language(client, source, language_code, notes)
                outcomes.append(outcome)

        duration_ms = (time.monotonic() - start_time) * 1000
        translation_logger.batch_complete(
            request.post_id,
            completed=sum(1 for o in outcomes if o.status == OutcomeStatus.COMPLETED),
            skipped=sum(1 for o in outcomes if o.status == OutcomeStatus.SKIPPED),
            failed=sum(1 for o in outcomes if o.status == OutcomeStatus.ERROR),
            duration_ms=duration_ms,
        )
        return outcomes

    async def _translate_language(
        self,
        client: BaseLLMClient,
        source: SourceContent,
        language_code: str,
        notes: str | None,
    ) -> LanguageOutcome:
        try:
            existing = await self.translations.get_for_language(source.id, language_code)
            if existing is not None:
                if existing.translation_status == TranslationStatus.COMPLETED.value:
                    translation_logger.language_skipped(source.id, language_code, existing.id)
                    return LanguageOutcome(
                        language_code=language_code,
                        status=OutcomeStatus.SKIPPED,
                        reason=ALREADY_COMPLETED_REASON,
                        translation_id=existing.id,
                    )

                previous_status = existing.translation_status
                async with transaction(self.session, table="post_translations"):
                    await self.translations.delete(existing.id)
                translation_logger.stale_translation_removed(
                    source.id, language_code, previous_status
                )

            if not source.title or not source.content:
                raise SourceContentError("Post missing required title or content")

            prompt = build_translation_prompt(source, language_code, notes)
            result = await client.complete(prompt)
            if not result.success or result.text is None:
                raise ProviderCallError(
                    result.error or f"{client.provider} API call failed"
                )

            marker = find_truncation_marker(result.text)
            if marker is not None:
                translation_logger.truncation_detected(language_code, marker)
                raise TruncatedResponseError(
                    "Translation was truncated by AI model - please try with "
                    "shorter content or contact support"
                )

            record = recover_record(result.text, source, language_code)
            validation = validate_translation(record)
            localization_status = (
                LocalizationStatus.REVIEWED
                if validation.passed
                else LocalizationStatus.NEEDS_REWORK
            )

            async with transaction(self.session, table="post_translations"):
                translation = await self.translations.create(
                    post_id=source.id,
                    language_code=language_code,
                    title=record.title,
                    content=record.content,
                    excerpt=record.excerpt,
                    meta_title=record.meta_title,
                    meta_description=record.meta_description,
                    meta_keywords=record.meta_keywords,
                    slug=record.slug,
                    cultural_adaptations=record.cultural_adaptations or None,
                    translation_status=TranslationStatus.COMPLETED.value,
                    localization_status=localization_status.value,
                    quality_score=validation.score,
                    quality_warnings=list(validation.warnings),
                    provenance=record.provenance.value,
                    published=False,
                )

            translation_logger.language_completed(
                source.id, language_code, translation.id, validation.score, validation.passed
            )
            return LanguageOutcome(
                language_code=language_code,
                status=OutcomeStatus.COMPLETED,
                translation_id=translation.id,
                quality_score=validation.score,
                warnings=list(validation.warnings),
                provenance=record.provenance.value,
            )

        except Exception as e:
            if isinstance(e, SQLAlchemyError) and self.session.in_transaction():
                await self.session.rollback()
            translation_logger.language_failed(source.id, language_code, e)
            return LanguageOutcome(
                language_code=language_code,
                status=OutcomeStatus.ERROR,
                error=str(e) or type(e).__name__,
            )
