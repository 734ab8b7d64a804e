"""
Post API routes
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from crud_backend.api.dependencies import get_post_repository
from crud_backend.models.post import Post, PostCreate, PostUpdate
from crud_backend.repositories.post_repository import PostRepository

router = APIRouter()


@router.post("", response_model=Post, status_code=201)
async def create_post(
    request: PostCreate,
    posts: PostRepository = Depends(get_post_repository)
):
    """Create a new post for an existing author"""
    return await posts.create_post(request)


@router.get("", response_model=List[Post])
async def list_posts(posts: PostRepository = Depends(get_post_repository)):
    """List posts, newest first"""
    return await posts.find_all_posts()


@router.get("/{post_id}", response_model=Post)
async def get_post(post_id: int, posts: PostRepository = Depends(get_post_repository)):
    """Get post by ID"""
    post = await posts.find_post_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return post


@router.put("/{post_id}", response_model=Post)
async def update_post(
    post_id: int,
    request: PostUpdate,
    posts: PostRepository = Depends(get_post_repository)
):
    """Update title and/or content; the author never changes"""
    return await posts.update_post(post_id, request)


@router.delete("/{post_id}", response_model=Post)
async def delete_post(post_id: int, posts: PostRepository = Depends(get_post_repository)):
    """Delete a post and return its last state"""
    return await posts.delete_post(post_id)
