"""
User-related Pydantic models
"""

from typing import List, Optional

from crud_backend.models.base import CamelModel
from crud_backend.models.post import Post


class UserCreate(CamelModel):
    email: str
    name: Optional[str] = None


class UserUpdate(CamelModel):
    """Only the fields present in the request are written"""
    email: Optional[str] = None
    name: Optional[str] = None


class User(CamelModel):
    id: int
    email: str
    name: Optional[str] = None


class UserWithPosts(User):
    posts: List[Post] = []
