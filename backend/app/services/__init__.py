"""Services layer - Business logic and orchestration.

Services coordinate between repositories, integrations, and other services
to implement business use cases. They contain no direct database or
external API access - that's delegated to repositories and integrations.
"""

from app.services.post_translation import (
    InvalidModelError,
    LanguageOutcome,
    MissingCredentialsError,
    OutcomeStatus,
    PostNotFoundError,
    PostTranslationService,
    ProviderCallError,
    SourceContentError,
    TranslationError,
    TranslationRequest,
    TruncatedResponseError,
)
from app.services.translation_quality import ValidationResult, validate_translation
from app.services.translation_recovery import (
    ExtractedRecord,
    Provenance,
    SourceContent,
    recover_record,
)

__all__ = [
    "ExtractedRecord",
    "InvalidModelError",
    "LanguageOutcome",
    "MissingCredentialsError",
    "OutcomeStatus",
    "PostNotFoundError",
    "PostTranslationService",
    "Provenance",
    "ProviderCallError",
    "SourceContent",
    "SourceContentError",
    "TranslationError",
    "TranslationRequest",
    "TruncatedResponseError",
    "ValidationResult",
    "recover_record",
    "validate_translation",
]
