"""PostRepository: read access to source posts."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import db_logger, get_logger
from app.models.post import Post

logger = get_logger(__name__)


class PostRepository:
    """Repository for Post lookups."""

    TABLE_NAME = "posts"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, post_id: str) -> Post | None:
        """Get a post by id.

        Args:
            post_id: UUID of the post

        Returns:
            Post instance if found, None otherwise
        """
        logger.debug("Fetching post by ID", extra={"post_id": post_id})
        try:
            result = await self.session.execute(select(Post).where(Post.id == post_id))
            return result.scalar_one_or_none()

        except SQLAlchemyError as e:
            db_logger.transaction_failure(
                e,
                table=self.TABLE_NAME,
                context=f"Fetching post_id={post_id}",
            )
            raise
