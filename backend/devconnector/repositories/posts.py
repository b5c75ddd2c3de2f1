"""Post Repository — feed reads and post/like/comment persistence."""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from devconnector.infrastructure.database import commit
from devconnector.models.post import Post

logger = logging.getLogger(__name__)


class PostRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_all(self) -> list[Post]:
        """All posts, newest first."""
        result = await self._db.execute(
            select(Post).order_by(Post.date.desc()),
        )
        return list(result.scalars().all())

    async def get(self, post_id: UUID) -> Post | None:
        return await self._db.get(Post, post_id)

    async def create(
        self, user_id: UUID, text: str, name: str, avatar: str | None,
    ) -> Post:
        post = Post(
            user_id=user_id, text=text, name=name, avatar=avatar,
            like=[], comments=[],
        )
        self._db.add(post)
        await commit(self._db)
        await self._db.refresh(post)
        logger.info(
            "Post created",
            extra={"user_id": str(user_id), "post_id": str(post.id)},
        )
        return post

    async def save(self, post: Post) -> Post:
        await commit(self._db)
        return post

    async def delete(self, post: Post) -> None:
        await self._db.delete(post)
        await commit(self._db)
        logger.info("Post deleted", extra={"post_id": str(post.id)})

    async def delete_by_user(self, user_id: UUID) -> None:
        """Stage deletion of every post by the user (committed by the caller)."""
        await self._db.execute(delete(Post).where(Post.user_id == user_id))
