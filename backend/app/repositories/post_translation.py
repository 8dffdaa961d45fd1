"""PostTranslationRepository with CRUD operations.

Handles all database operations for PostTranslation entities.
Follows the layered architecture pattern: API -> Service -> Repository -> Database.

Methods flush but never commit; the caller owns the transaction boundary.

ERROR LOGGING REQUIREMENTS:
- Log method entry/exit at DEBUG level with parameters (sanitized)
- Log all exceptions with full stack trace and context
- Include entity IDs (post_id, translation_id) in all logs
- Log state transitions at INFO level
- Add timing logs for operations >1 second
"""

import time
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import db_logger, get_logger
from app.models.post_translation import PostTranslation

logger = get_logger(__name__)


class PostTranslationRepository:
    """Repository for PostTranslation CRUD operations."""

    TABLE_NAME = "post_translations"
    SLOW_OPERATION_THRESHOLD_MS = 1000  # 1 second

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session for database operations
        """
        self.session = session

    async def get_for_language(
        self, post_id: str, language_code: str
    ) -> PostTranslation | None:
        """Get the translation of a post in one language, if any."""
        logger.debug(
            "Fetching translation",
            extra={"post_id": post_id, "language_code": language_code},
        )
        try:
            result = await self.session.execute(
                select(PostTranslation).where(
                    PostTranslation.post_id == post_id,
                    PostTranslation.language_code == language_code,
                )
            )
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Fetching translation post_id={post_id} language={language_code}",
            )
            raise

    async def get_by_id(self, translation_id: str) -> PostTranslation | None:
        """Get a translation by its id."""
        try:
            result = await self.session.execute(
                select(PostTranslation).where(PostTranslation.id == translation_id)
            )
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Fetching translation_id={translation_id}",
            )
            raise

    async def list_for_post(self, post_id: str) -> list[PostTranslation]:
        """List all translations of a post ordered by language code."""
        try:
            result = await self.session.execute(
                select(PostTranslation)
                .where(PostTranslation.post_id == post_id)
                .order_by(PostTranslation.language_code)
            )
            return list(result.scalars().all())

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Listing translations for post_id={post_id}",
            )
            raise

    async def create(self, **fields: Any) -> PostTranslation:
        """Insert a translation row.

        Raises:
            IntegrityError: If a row for (post_id, language_code) already exists
            SQLAlchemyError: On other database errors
        """
        start_time = time.monotonic()
        post_id = fields.get("post_id")
        language_code = fields.get("language_code")

        try:
            translation = PostTranslation(**fields)
            self.session.add(translation)
            await self.session.flush()
            await self.session.refresh(translation)

            duration_ms = (time.monotonic() - start_time) * 1000
            if duration_ms > self.SLOW_OPERATION_THRESHOLD_MS:
                db_logger.slow_query(
                    query="INSERT INTO post_translations",
                    duration_ms=duration_ms,
                    table=self.TABLE_NAME,
                )

            logger.debug(
                "Translation row inserted",
                extra={
                    "translation_id": translation.id,
                    "post_id": post_id,
                    "language_code": language_code,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            return translation

        except IntegrityError as e:
            logger.error(
                "Failed to create translation - integrity error",
                extra={
                    "post_id": post_id,
                    "language_code": language_code,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
                exc_info=True,
            )
            raise

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Creating translation post_id={post_id} language={language_code}",
            )
            raise

    async def set_published(
        self, translation: PostTranslation, published: bool
    ) -> PostTranslation:
        """Set the published flag of a translation."""
        previous = translation.published
        try:
            translation.published = published
            await self.session.flush()
            await self.session.refresh(translation)

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Publishing translation_id={translation.id}",
            )
            raise

        if previous != published:
            logger.info(
                "Translation published flag changed",
                extra={
                    "translation_id": translation.id,
                    "from_published": previous,
                    "to_published": published,
                },
            )
        return translation

    async def delete(self, translation_id: str) -> bool:
        """Delete a translation by id. Returns False if nothing was deleted."""
        try:
            result = await self.session.execute(
                delete(PostTranslation).where(PostTranslation.id == translation_id)
            )
            await self.session.flush()

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Deleting translation_id={translation_id}",
            )
            raise

        deleted: bool = result.rowcount > 0  # type: ignore[attr-defined]
        logger.debug(
            "Translation delete executed",
            extra={"translation_id": translation_id, "deleted": deleted},
        )
        return deleted
