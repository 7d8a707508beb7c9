"""API tests for the FastAPI authentication and permission dependencies.

A throwaway app mounts guarded routes; container dependencies are
overridden with the in-memory gate and a test JWT service.

Tests cover:
- 401 with WWW-Authenticate for missing/invalid tokens
- 403 "Access denied" for every deny, without naming the permission
- ALL vs ANY requirement modes
- Declaration-time rejection of malformed requirements
"""

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from rolegate.application.queries.handlers.authorize_request_handler import (
    AuthorizeRequestHandler,
)
from rolegate.core.container import get_authorize_request_handler, get_token_service
from rolegate.domain.value_objects import AuthorizedContext
from rolegate.presentation.dependencies import (
    CurrentUser,
    get_current_user,
    require_any_permission,
    require_permission,
)


def build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/me")
    async def me(current_user: CurrentUser = Depends(get_current_user)):
        return {"user_id": str(current_user.user_id), "email": current_user.email}

    @app.get("/users")
    async def list_users(ctx: AuthorizedContext = Depends(require_permission("users.view"))):
        return {"user_id": str(ctx.user_id), "permissions": sorted(ctx.permissions)}

    @app.delete("/users")
    async def purge_users(
        ctx: AuthorizedContext = Depends(
            require_permission("users.view", "users.delete")
        ),
    ):
        return {"ok": True}

    @app.get("/reports")
    async def reports(
        ctx: AuthorizedContext = Depends(
            require_any_permission("reports.view", "reports.admin")
        ),
    ):
        return {"ok": True}

    return app


@pytest.fixture
def client(token_service, gate):
    app = build_app()
    handler = AuthorizeRequestHandler(token_service=token_service, gate=gate)
    app.dependency_overrides[get_authorize_request_handler] = lambda: handler
    app.dependency_overrides[get_token_service] = lambda: token_service
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def bearer(token_service):
    def make(user):
        token = token_service.issue_access_token(user.id, user.email)
        return {"Authorization": f"Bearer {token}"}

    return make


@pytest.mark.api
class TestGetCurrentUser:
    def test_valid_token(self, client, directory, bearer):
        user = directory.add_user()

        response = client.get("/me", headers=bearer(user))

        assert response.status_code == 200
        assert response.json() == {"user_id": str(user.id), "email": user.email}

    def test_missing_token(self, client):
        response = client.get("/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["detail"] == "Authentication required"

    def test_invalid_token(self, client):
        response = client.get("/me", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid or expired token"


@pytest.mark.api
class TestRequirePermission:
    def test_allowed(self, client, directory, bearer):
        user = directory.add_user(directory.add_role("Admin", ["users.view"]))

        response = client.get("/users", headers=bearer(user))

        assert response.status_code == 200
        assert response.json() == {"user_id": str(user.id), "permissions": ["users.view"]}

    def test_missing_token_is_401(self, client):
        response = client.get("/users")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_401(self, client):
        response = client.get("/users", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_insufficient_permission_is_403(self, client, directory, bearer):
        user = directory.add_user(directory.add_role("User", ["dashboard.view"]))

        response = client.get("/users", headers=bearer(user))

        assert response.status_code == 403
        assert response.json() == {"detail": "Access denied"}
        assert "users.view" not in response.text

    def test_unknown_user_is_403(self, client, directory, bearer):
        user = directory.add_user()
        del directory.users[user.id]

        response = client.get("/users", headers=bearer(user))

        assert response.status_code == 403
        assert response.json() == {"detail": "Access denied"}

    def test_all_mode_requires_every_permission(self, client, directory, bearer):
        viewer = directory.add_user(
            directory.add_role("Viewer", ["users.view"]), email="viewer@example.com"
        )
        admin = directory.add_user(
            directory.add_role("Admin", ["users.view", "users.delete"]),
            email="admin@example.com",
        )

        assert client.delete("/users", headers=bearer(viewer)).status_code == 403
        assert client.delete("/users", headers=bearer(admin)).status_code == 200

    def test_any_mode_accepts_one_permission(self, client, directory, bearer):
        user = directory.add_user(directory.add_role("Analyst", ["reports.view"]))
        other = directory.add_user(
            directory.add_role("User", ["dashboard.view"]), email="other@example.com"
        )

        assert client.get("/reports", headers=bearer(user)).status_code == 200
        assert client.get("/reports", headers=bearer(other)).status_code == 403

    @pytest.mark.parametrize("requirements", [(), ("users",), ("Users.View",)])
    def test_malformed_requirement_fails_at_declaration(self, requirements):
        with pytest.raises(ValueError):
            require_permission(*requirements)
