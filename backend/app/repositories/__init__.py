"""Repositories layer - Data access and persistence.

Repositories handle all database operations using SQLAlchemy.
They abstract the database implementation from the service layer.
"""

from app.repositories.api_setting import ApiSettingRepository
from app.repositories.post import PostRepository
from app.repositories.post_translation import PostTranslationRepository

__all__ = ["ApiSettingRepository", "PostRepository", "PostTranslationRepository"]
