"""
User API routes
"""

from typing import List, Type

from fastapi import APIRouter, Depends, HTTPException

from crud_backend.api.dependencies import get_user_repository, get_user_with_posts_repository
from crud_backend.models.user import User, UserCreate, UserUpdate, UserWithPosts
from crud_backend.repositories.user_repository import UserRepository, UserWithPostsRepository


def build_users_router(include_posts: bool = False) -> APIRouter:
    """Users router; with ``include_posts`` reads embed each user's posts"""
    router = APIRouter()
    read_model: Type[User] = UserWithPosts if include_posts else User

    @router.post("", response_model=User, status_code=201)
    async def create_user(
        request: UserCreate,
        users: UserRepository = Depends(get_user_repository)
    ):
        """Create a new user"""
        return await users.create_user(request)

    @router.get("", response_model=List[read_model])
    async def list_users(users: UserRepository = Depends(get_user_repository)):
        """List every user"""
        return await users.find_all_users()

    @router.get("/{user_id}", response_model=read_model)
    async def get_user(user_id: int, users: UserRepository = Depends(get_user_repository)):
        """Get user by ID"""
        user = await users.find_user_by_id(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    @router.put("/{user_id}", response_model=User)
    async def update_user(
        user_id: int,
        request: UserUpdate,
        users: UserRepository = Depends(get_user_repository)
    ):
        """Update the fields present in the request body"""
        return await users.update_user(user_id, request)

    @router.delete("/{user_id}", response_model=User)
    async def delete_user(user_id: int, users: UserRepository = Depends(get_user_repository)):
        """Delete a user and return its last state"""
        return await users.delete_user(user_id)

    if include_posts:
        @router.get("/{user_id}/posts", response_model=UserWithPosts)
        async def get_user_with_posts(
            user_id: int,
            users: UserWithPostsRepository = Depends(get_user_with_posts_repository)
        ):
            """Get a user together with the posts they wrote"""
            user = await users.find_user_with_posts(user_id)
            if user is None:
                raise HTTPException(status_code=404, detail="User not found")
            return user

    return router
