"""Tests for JWT authentication and the login user."""
import uuid

from sqlalchemy import select, func

from app.core.config import settings
from app.core.security import (
    authenticate_user,
    create_refresh_token,
    ensure_admin_user,
    issue_tokens,
    verify_password,
    verify_refresh_token,
)
from app.models import User


class TestLogin:
    """Tests for POST /api/auth/login and token handling."""

    async def test_valid_credentials(self, anon_client, admin_user, admin_password):
        response = await anon_client.post(
            "/api/auth/login",
            json={"username": "admin", "password": admin_password}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["tokenType"] == "bearer"
        assert data["user"]["username"] == "admin"

        response = await anon_client.get(
            "/api/auth/user",
            headers={"Authorization": f"Bearer {data['accessToken']}"}
        )
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    async def test_wrong_password(self, anon_client, admin_user, admin_password):
        response = await anon_client.post(
            "/api/auth/login",
            json={"username": "admin", "password": admin_password.upper()}
        )

        assert response.status_code == 401

    async def test_unknown_user(self, anon_client, admin_user, admin_password):
        response = await anon_client.post(
            "/api/auth/login",
            json={"username": "nobody", "password": admin_password}
        )

        assert response.status_code == 401

    async def test_inactive_user(self, anon_client, admin_user, admin_password, test_db):
        admin_user.is_active = False
        await test_db.commit()

        response = await anon_client.post(
            "/api/auth/login",
            json={"username": "admin", "password": admin_password}
        )

        assert response.status_code == 403

    async def test_refresh(self, anon_client, admin_user):
        response = await anon_client.post(
            "/api/auth/refresh",
            json={"refreshToken": create_refresh_token(subject=admin_user.id)}
        )

        assert response.status_code == 200
        assert response.json()["accessToken"]

    async def test_access_token_cannot_refresh(self, client, admin_user):
        access_token = client.headers["Authorization"].split(" ", 1)[1]

        response = await client.post("/api/auth/refresh", json={"refreshToken": access_token})

        assert response.status_code == 401

    async def test_refresh_token_cannot_access(self, anon_client, admin_user):
        token = create_refresh_token(subject=admin_user.id)

        response = await anon_client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401


class TestProtectedEndpoints:
    """Business endpoints require a bearer token."""

    async def test_missing_token(self, anon_client):
        for endpoint in ("/api/products", "/api/customers", "/api/suppliers", "/api/transactions"):
            response = await anon_client.get(endpoint)
            assert response.status_code in (401, 403), f"Endpoint {endpoint} should require auth"

    async def test_invalid_token(self, anon_client):
        response = await anon_client.get(
            "/api/products",
            headers={"Authorization": "Bearer invalid-token"}
        )

        assert response.status_code == 401


class TestAccountManagement:
    """Tests for password change and logout."""

    async def test_change_password(self, client, admin_user, admin_password, test_db):
        response = await client.post(
            "/api/auth/change-password",
            json={"currentPassword": admin_password, "newPassword": "a-much-better-one"}
        )

        assert response.status_code == 200
        await test_db.refresh(admin_user)
        assert verify_password("a-much-better-one", admin_user.password_hash)

    async def test_change_password_wrong_current(self, client):
        response = await client.post(
            "/api/auth/change-password",
            json={"currentPassword": "wrong", "newPassword": "a-much-better-one"}
        )

        assert response.status_code == 400

    async def test_logout(self, client):
        response = await client.post("/api/auth/logout")

        assert response.status_code == 200


class TestAdminSeeding:
    """Tests for the startup login account."""

    async def test_creates_admin_once(self, test_db):
        assert await ensure_admin_user(test_db) is True
        assert await ensure_admin_user(test_db) is False

        result = await test_db.execute(select(func.count(User.id)))
        assert result.scalar() == 1

        result = await test_db.execute(select(User))
        user = result.scalar_one()
        assert user.username == settings.admin_username
        assert verify_password(settings.admin_password, user.password_hash)


class TestCredentialHelpers:
    """Tests for the helpers behind the login endpoints."""

    async def test_authenticate_user(self, test_db, admin_user, admin_password):
        user = await authenticate_user(test_db, "admin", admin_password)

        assert user is not None
        assert user.id == admin_user.id

    async def test_wrong_password_or_username(self, test_db, admin_user, admin_password):
        assert await authenticate_user(test_db, "admin", "not-the-password") is None
        assert await authenticate_user(test_db, "nobody", admin_password) is None

    def test_issue_tokens(self):
        user_id = uuid.uuid4()
        tokens = issue_tokens(user_id)

        assert tokens["token_type"] == "bearer"
        assert verify_refresh_token(tokens["refresh_token"]) == user_id
