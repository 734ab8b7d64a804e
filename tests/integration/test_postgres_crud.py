"""
End-to-end behaviour against a real PostgreSQL database
"""

import asyncio

import asyncpg
import pytest
from fastapi.testclient import TestClient

from crud_backend.app import create_app
from crud_backend.config.settings import ServiceVariant
from crud_backend.database.connection import Database
from crud_backend.models.post import PostCreate, PostUpdate
from crud_backend.models.user import UserCreate, UserUpdate
from crud_backend.repositories.base import RecordNotFoundError
from crud_backend.repositories.post_repository import PostRepository
from crud_backend.repositories.user_repository import UserRepository, UserWithPostsRepository

from pg_helpers import requires_database, reset_tables

pytestmark = requires_database


class TestUserRepositoryLive:

    @pytest.mark.asyncio
    async def test_ids_are_unique_and_stable(self, database, fake):
        users = UserRepository(database.pool)
        created = [await users.create_user(UserCreate(email=fake.unique.email())) for _ in range(3)]

        assert len({u.id for u in created}) == 3
        for user in created:
            assert (await users.find_user_by_id(user.id)).id == user.id

    @pytest.mark.asyncio
    async def test_missing_user_reads_as_none(self, database):
        assert await UserRepository(database.pool).find_user_by_id(123456) is None

    @pytest.mark.asyncio
    async def test_duplicate_email_is_rejected(self, database, fake):
        users = UserRepository(database.pool)
        email = fake.email()
        await users.create_user(UserCreate(email=email))

        with pytest.raises(asyncpg.UniqueViolationError):
            await users.create_user(UserCreate(email=email))

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, database, fake):
        users = UserRepository(database.pool)
        user = await users.create_user(UserCreate(email=fake.email(), name="Before"))

        updated = await users.update_user(user.id, UserUpdate(name="After"))

        assert updated.name == "After"
        assert updated.email == user.email

    @pytest.mark.asyncio
    async def test_mutations_on_missing_ids_raise(self, database):
        users = UserRepository(database.pool)
        posts = PostRepository(database.pool)

        with pytest.raises(RecordNotFoundError):
            await users.update_user(999, UserUpdate(name="x"))
        with pytest.raises(RecordNotFoundError):
            await users.delete_user(999)
        with pytest.raises(RecordNotFoundError):
            await posts.update_post(999, PostUpdate(title="x"))
        with pytest.raises(RecordNotFoundError):
            await posts.delete_post(999)


class TestPostsLive:

    @pytest.mark.asyncio
    async def test_posts_listed_newest_first(self, database, fake):
        author = await UserRepository(database.pool).create_user(UserCreate(email=fake.email()))
        posts = PostRepository(database.pool)
        for _ in range(3):
            await posts.create_post(PostCreate(title=fake.sentence(), content=fake.text(), author_id=author.id))

        listed = await posts.find_all_posts()

        assert len(listed) == 3
        assert all(a.created_at >= b.created_at for a, b in zip(listed, listed[1:]))

    @pytest.mark.asyncio
    async def test_update_post_keeps_author(self, database, fake):
        users = UserRepository(database.pool)
        author = await users.create_user(UserCreate(email=fake.email()))
        other = await users.create_user(UserCreate(email=fake.email()))
        posts = PostRepository(database.pool)
        post = await posts.create_post(PostCreate(title="T", content="C", author_id=author.id))

        updated = await posts.update_post(
            post.id, PostUpdate.model_validate({"content": "C2", "authorId": other.id})
        )

        assert updated.author_id == author.id
        assert updated.title == "T"
        assert updated.content == "C2"

    @pytest.mark.asyncio
    async def test_unknown_author_is_rejected(self, database):
        with pytest.raises(asyncpg.ForeignKeyViolationError):
            await PostRepository(database.pool).create_post(PostCreate(title="T", author_id=4242))

    @pytest.mark.asyncio
    async def test_author_sees_created_post(self, database, fake):
        users = UserWithPostsRepository(database.pool)
        author = await users.create_user(UserCreate(email=fake.email()))
        post = await PostRepository(database.pool).create_post(
            PostCreate(title="T", content="C", author_id=author.id)
        )

        by_id = await users.find_user_by_id(author.id)
        with_posts = await users.find_user_with_posts(author.id)
        everyone = await users.find_all_users()

        assert [p.id for p in by_id.posts] == [post.id]
        assert with_posts == by_id
        assert everyone[0].posts[0].created_at == post.created_at

    @pytest.mark.asyncio
    async def test_deleting_author_with_posts_is_rejected(self, database, fake):
        users = UserRepository(database.pool)
        author = await users.create_user(UserCreate(email=fake.email()))
        await PostRepository(database.pool).create_post(PostCreate(title="T", author_id=author.id))

        with pytest.raises(asyncpg.ForeignKeyViolationError):
            await users.delete_user(author.id)

        assert await users.find_user_by_id(author.id) is not None


class TestRelationsServiceScenario:
    """User -> post -> listings -> delete, through HTTP"""

    def test_scenario(self, dsn):
        asyncio.run(reset_tables(dsn))
        app = create_app(
            ServiceVariant.RELATIONS,
            database=Database(dsn, min_size=1, max_size=2),
            auto_create_schema=True
        )

        with TestClient(app) as client:
            user = client.post("/users", json={"email": "a@example.com", "name": "A"}).json()
            post = client.post(
                "/posts", json={"title": "T", "content": "C", "authorId": user["id"]}
            ).json()

            assert post["authorId"] == user["id"]
            assert [p["id"] for p in client.get("/posts").json()] == [post["id"]]

            with_posts = client.get(f"/users/{user['id']}/posts").json()
            assert with_posts["posts"][0]["title"] == "T"

            assert client.delete(f"/users/{user['id']}").status_code == 409
            assert client.delete(f"/posts/{post['id']}").status_code == 200
            assert client.delete(f"/users/{user['id']}").status_code == 200
            assert client.get(f"/users/{user['id']}").status_code == 404
