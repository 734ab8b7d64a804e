from crud_backend.models.post import Post, PostCreate, PostUpdate
from crud_backend.models.user import User, UserCreate, UserUpdate, UserWithPosts

__all__ = [
    "Post",
    "PostCreate",
    "PostUpdate",
    "User",
    "UserCreate",
    "UserUpdate",
    "UserWithPosts",
]
