"""Post model for source blog posts.

A Post is the original-language article that translations are generated from:
- title, excerpt: plain text
- content: HTML body
- slug: URL slug, also the base for translation slugs
- localization_notes: standing guidance passed to the translator prompt
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, String, Text, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base

if TYPE_CHECKING:
    from app.models.post_translation import PostTranslation


class Post(Base):
    """Post model for original blog posts.

    Attributes:
        id: UUID primary key
        title: Post title
        slug: URL slug
        content: HTML content
        excerpt: Short summary shown in listings
        localization_notes: Default notes for translators
        published: Whether the post is live
        created_at: Timestamp when record was created
        updated_at: Timestamp when record was last updated
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
        server_default=text("gen_random_uuid()"),
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    content: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    excerpt: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    localization_notes: Mapped[str | None] = mapped_column(
        Text,
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

    translations: Mapped[list["PostTranslation"]] = relationship(
        "PostTranslation",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id!r}, slug={self.slug!r})>"
