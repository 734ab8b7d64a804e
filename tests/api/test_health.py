"""
Health route and the application factory
"""

from unittest.mock import AsyncMock

from crud_backend.config.settings import ServiceVariant


class TestHealth:

    def test_healthy(self, relations_client):
        response = relations_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == ServiceVariant.RELATIONS.value

    def test_database_down_is_503(self, crud_client, database):
        database.ping = AsyncMock(side_effect=ConnectionRefusedError("connection refused"))

        response = crud_client.get("/health")

        assert response.status_code == 503
        assert response.json()["error"] == "HTTP 503"
        assert "trace_id" in response.json()


class TestAppFactory:

    def test_state_holds_injected_database(self, crud_client, database):
        assert crud_client.app.state.database is database
        assert crud_client.app.state.service_variant == ServiceVariant.CRUD

    def test_openapi_lists_variant_routes(self, crud_client, relations_client):
        crud_paths = set(crud_client.get("/openapi.json").json()["paths"])
        relations_paths = set(relations_client.get("/openapi.json").json()["paths"])

        assert "/posts" not in crud_paths
        assert {"/users", "/users/{user_id}"} <= crud_paths
        assert {"/posts", "/posts/{post_id}", "/users/{user_id}/posts"} <= relations_paths

    def test_every_operation_is_documented(self, relations_client):
        paths = relations_client.get("/openapi.json").json()["paths"]

        for path, operations in paths.items():
            for method, operation in operations.items():
                assert operation.get("description"), f"{method.upper()} {path} has no description"
