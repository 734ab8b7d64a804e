"""
Post-related Pydantic models
"""

from typing import Optional
from datetime import datetime

from crud_backend.models.base import CamelModel


class PostCreate(CamelModel):
    title: str
    content: Optional[str] = None
    author_id: int


class PostUpdate(CamelModel):
    """Title and content only; the author of a post cannot be changed"""
    title: Optional[str] = None
    content: Optional[str] = None


class Post(CamelModel):
    id: int
    title: str
    content: Optional[str] = None
    author_id: int
    created_at: datetime
