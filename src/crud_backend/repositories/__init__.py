from crud_backend.repositories.base import BaseRepository, RecordNotFoundError
from crud_backend.repositories.post_repository import PostRepository
from crud_backend.repositories.user_repository import UserRepository, UserWithPostsRepository

__all__ = [
    "BaseRepository",
    "PostRepository",
    "RecordNotFoundError",
    "UserRepository",
    "UserWithPostsRepository",
]
