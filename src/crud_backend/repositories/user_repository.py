"""
User repositories.

``UserRepository`` serves the users-only service; ``UserWithPostsRepository``
serves the relations service and eager-loads each user's posts in the same
query.
"""

import json
import logging
from typing import List, Optional

from crud_backend.models.user import User, UserCreate, UserUpdate, UserWithPosts
from crud_backend.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, email, name"

# One LEFT JOIN per lookup; posts come back as a JSON array ordered by id.
USER_WITH_POSTS_SELECT = """
    SELECT u.id, u.email, u.name,
           COALESCE(
               json_agg(
                   json_build_object(
                       'id', p.id,
                       'title', p.title,
                       'content', p.content,
                       'author_id', p.author_id,
                       'created_at', p.created_at
                   ) ORDER BY p.id
               ) FILTER (WHERE p.id IS NOT NULL),
               '[]'::json
           ) AS posts
    FROM users u
    LEFT JOIN posts p ON p.author_id = u.id
"""


class UserRepository(BaseRepository):
    """CRUD operations for users"""

    resource_name = "User"

    async def create_user(self, data: UserCreate) -> User:
        values = data.model_dump()
        columns = ", ".join(values)
        placeholders = ", ".join(f"${i}" for i in range(1, len(values) + 1))
        row = await self._fetch_one(
            f"INSERT INTO users ({columns}) VALUES ({placeholders}) RETURNING {USER_COLUMNS}",
            *values.values()
        )
        logger.info(f"Created user {row['id']}")
        return User.model_validate(dict(row))

    async def find_user_by_id(self, user_id: int) -> Optional[User]:
        """Returns None when no user has this id"""
        row = await self._fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE id = $1", user_id)
        return User.model_validate(dict(row)) if row else None

    async def find_all_users(self) -> List[User]:
        rows = await self._fetch_all(f"SELECT {USER_COLUMNS} FROM users ORDER BY id")
        return [User.model_validate(dict(row)) for row in rows]

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        """Write the fields set on ``data``; raises RecordNotFoundError for unknown ids"""
        values = data.model_dump(exclude_unset=True)
        if not values:
            row = await self._fetch_existing(
                user_id, f"SELECT {USER_COLUMNS} FROM users WHERE id = $1", user_id
            )
            return User.model_validate(dict(row))

        assignments, params = self._build_assignments(values, start=2)
        row = await self._fetch_existing(
            user_id,
            f"UPDATE users SET {assignments} WHERE id = $1 RETURNING {USER_COLUMNS}",
            user_id, *params
        )
        logger.info(f"Updated user {user_id}: {sorted(values)}")
        return User.model_validate(dict(row))

    async def delete_user(self, user_id: int) -> User:
        """Delete and return the prior state; raises RecordNotFoundError for unknown ids"""
        row = await self._fetch_existing(
            user_id, f"DELETE FROM users WHERE id = $1 RETURNING {USER_COLUMNS}", user_id
        )
        logger.info(f"Deleted user {user_id}")
        return User.model_validate(dict(row))


class UserWithPostsRepository(UserRepository):
    """User operations for the relations service; reads include posts"""

    @staticmethod
    def _to_user_with_posts(row) -> UserWithPosts:
        record = dict(row)
        posts = record.get("posts")
        if isinstance(posts, str):
            record["posts"] = json.loads(posts)
        return UserWithPosts.model_validate(record)

    async def find_user_by_id(self, user_id: int) -> Optional[UserWithPosts]:
        row = await self._fetch_one(
            f"{USER_WITH_POSTS_SELECT} WHERE u.id = $1 GROUP BY u.id", user_id
        )
        return self._to_user_with_posts(row) if row else None

    async def find_all_users(self) -> List[UserWithPosts]:
        rows = await self._fetch_all(f"{USER_WITH_POSTS_SELECT} GROUP BY u.id ORDER BY u.id")
        return [self._to_user_with_posts(row) for row in rows]

    async def find_user_with_posts(self, user_id: int) -> Optional[UserWithPosts]:
        """Same result as find_user_by_id on this repository"""
        return await self.find_user_by_id(user_id)
