"""Create posts, post_translations and api_settings tables.

Revision ID: 0001
Revises: None
Create Date: 2026-10-17

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create translation tables."""
    op.create_table(
        "posts",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("localization_notes", sa.Text(), nullable=True),
        sa.Column(
            "published",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug", name="uq_posts_slug"),
    )

    op.create_table(
        "post_translations",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("post_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("language_code", sa.String(length=20), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=False),
        sa.Column("meta_title", sa.Text(), nullable=False),
        sa.Column("meta_description", sa.Text(), nullable=False),
        sa.Column("meta_keywords", sa.Text(), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("cultural_adaptations", sa.Text(), nullable=True),
        sa.Column(
            "translation_status",
            sa.String(length=50),
            server_default=sa.text("'completed'"),
            nullable=False,
        ),
        sa.Column(
            "localization_status",
            sa.String(length=50),
            server_default=sa.text("'needs_rework'"),
            nullable=False,
        ),
        sa.Column("quality_score", sa.Integer(), nullable=True),
        sa.Column(
            "quality_warnings",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=True,
        ),
        sa.Column("provenance", sa.String(length=20), nullable=True),
        sa.Column(
            "published",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "post_id", "language_code", name="uq_post_translations_post_language"
        ),
    )
    op.create_index(
        op.f("ix_post_translations_post_id"), "post_translations", ["post_id"], unique=False
    )
    op.create_index(
        op.f("ix_post_translations_language_code"),
        "post_translations",
        ["language_code"],
        unique=False,
    )
    op.create_index(
        op.f("ix_post_translations_translation_status"),
        "post_translations",
        ["translation_status"],
        unique=False,
    )

    op.create_table(
        "api_settings",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=False),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("setting_name", sa.String(length=100), nullable=False),
        sa.Column("setting_value", sa.Text(), nullable=True),
        sa.Column(
            "is_active",
            sa.Boolean(),
            server_default=sa.text("true"),
            nullable=False,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("setting_name", name="uq_api_settings_setting_name"),
    )


def downgrade() -> None:
    """Drop translation tables."""
    op.drop_table("api_settings")
    op.drop_index(op.f("ix_post_translations_translation_status"), table_name="post_translations")
    op.drop_index(op.f("ix_post_translations_language_code"), table_name="post_translations")
    op.drop_index(op.f("ix_post_translations_post_id"), table_name="post_translations")
    op.drop_table("post_translations")
    op.drop_table("posts")
