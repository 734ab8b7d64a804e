"""
Post repository
"""

import logging
from typing import List, Optional

from crud_backend.models.post import Post, PostCreate, PostUpdate
from crud_backend.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

POST_COLUMNS = "id, title, content, author_id, created_at"


class PostRepository(BaseRepository):
    """CRUD operations for posts"""

    resource_name = "Post"

    async def create_post(self, data: PostCreate) -> Post:
        """Insert a post; an unknown author surfaces as ForeignKeyViolationError"""
        row = await self._fetch_one(
            f"""
            INSERT INTO posts (title, content, author_id)
            VALUES ($1, $2, $3)
            RETURNING {POST_COLUMNS}
            """,
            data.title, data.content, data.author_id
        )
        logger.info(f"Created post {row['id']} for author {row['author_id']}")
        return Post.model_validate(dict(row))

    async def find_all_posts(self) -> List[Post]:
        """All posts, most recent first"""
        rows = await self._fetch_all(
            f"SELECT {POST_COLUMNS} FROM posts ORDER BY created_at DESC, id DESC"
        )
        return [Post.model_validate(dict(row)) for row in rows]

    async def find_post_by_id(self, post_id: int) -> Optional[Post]:
        row = await self._fetch_one(f"SELECT {POST_COLUMNS} FROM posts WHERE id = $1", post_id)
        return Post.model_validate(dict(row)) if row else None

    async def update_post(self, post_id: int, data: PostUpdate) -> Post:
        values = data.model_dump(include={"title", "content"}, exclude_unset=True)
        if not values:
            row = await self._fetch_existing(
                post_id, f"SELECT {POST_COLUMNS} FROM posts WHERE id = $1", post_id
            )
            return Post.model_validate(dict(row))

        assignments, params = self._build_assignments(values, start=2)
        row = await self._fetch_existing(
            post_id,
            f"UPDATE posts SET {assignments} WHERE id = $1 RETURNING {POST_COLUMNS}",
            post_id, *params
        )
        logger.info(f"Updated post {post_id}: {sorted(values)}")
        return Post.model_validate(dict(row))

    async def delete_post(self, post_id: int) -> Post:
        row = await self._fetch_existing(
            post_id, f"DELETE FROM posts WHERE id = $1 RETURNING {POST_COLUMNS}", post_id
        )
        logger.info(f"Deleted post {post_id}")
        return Post.model_validate(dict(row))
