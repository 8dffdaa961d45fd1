"""Models layer - SQLAlchemy ORM models.

Models define the database schema and relationships.
All models inherit from the Base class defined in core.database.
"""

from app.core.database import Base
from app.models.api_setting import ApiSetting
from app.models.post import Post
from app.models.post_translation import (
    LocalizationStatus,
    PostTranslation,
    TranslationStatus,
)

__all__ = [
    "ApiSetting",
    "Base",
    "LocalizationStatus",
    "Post",
    "PostTranslation",
    "TranslationStatus",
]
