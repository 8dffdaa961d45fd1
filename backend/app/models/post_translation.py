"""PostTranslation model for per-language translations of a Post.

One row per (post_id, language_code). A row is only ever inserted after the
translation pipeline produced a complete record, so translation_status is
'completed' for rows written by the service. Other statuses come from
legacy or manually created rows and are replaced on the next run.

- localization_status: 'reviewed' when the quality check passed,
  'needs_rework' when the record was saved but flagged for a human
- provenance: which recovery tier produced the record
  (parsed / reconstructed / emergency)
- published: always false at creation; publishing is a separate step
"""

from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.post import Post


class TranslationStatus(str, Enum):
    """Lifecycle status of a translation row."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class LocalizationStatus(str, Enum):
    """Review status derived from the quality check."""

    REVIEWED = "reviewed"
    NEEDS_REWORK = "needs_rework"


class PostTranslation(Base):
    """PostTranslation model.

    Attributes:
        id: UUID primary key
        post_id: Reference to the source post
        language_code: Target language code (da, sv, no, de-AT, ...)
        title, content, excerpt: Translated post fields
        meta_title, meta_description, meta_keywords: Translated SEO fields
        slug: URL slug for the translated post
        cultural_adaptations: Model notes on localization changes
        translation_status: Row lifecycle status
        localization_status: reviewed / needs_rework
        quality_score: 0-100 score from the quality check
        quality_warnings: Warnings from the quality check
        provenance: Recovery tier that produced the record
        published: Whether the translation is live
        created_at: Timestamp when record was created
        updated_at: Timestamp when record was last updated
    """

    __tablename__ = "post_translations"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
        server_default=text("gen_random_uuid()"),
    )

    post_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    language_code: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    excerpt: Mapped[str] = mapped_column(Text, nullable=False)
    meta_title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    meta_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    meta_keywords: Mapped[str] = mapped_column(Text, nullable=False, default="")

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    cultural_adaptations: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    translation_status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=TranslationStatus.COMPLETED.value,
        server_default=text("'completed'"),
        index=True,
    )

    localization_status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=LocalizationStatus.NEEDS_REWORK.value,
        server_default=text("'needs_rework'"),
    )

    quality_score: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )

    quality_warnings: Mapped[list[Any] | None] = mapped_column(
        JSONB,
        nullable=True,
    )

    provenance: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )

    published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        server_default=text("now()"),
        onupdate=lambda: datetime.now(UTC),
    )

    post: Mapped["Post"] = relationship(
        "Post",
        back_populates="translations",
    )

    __table_args__ = (
        UniqueConstraint("post_id", "language_code", name="uq_post_translations_post_language"),
    )

    def __repr__(self) -> str:
        return (
            f"<PostTranslation(id={self.id!r}, post_id={self.post_id!r}, "
            f"language_code={self.language_code!r}, status={self.translation_status!r})>"
        )
