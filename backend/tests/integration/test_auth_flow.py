"""
Integration tests for the authentication flow.

Tests the complete authentication system end-to-end:
- HTTP Basic credentials on protected routes
- Form login issuing a session cookie
- Logout clearing and revoking it
- Forged and expired cookies being rejected

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from carmaint.core.config import settings
from carmaint.core.security import create_session_token


COOKIE = settings.session_cookie_name


async def login(client: AsyncClient, username: str = "user", password: str = "test_password"):
    return await client.post("/login", data={"username": username, "password": password})


@pytest.mark.anyio
class TestBasicAuth:

    async def test_wrong_password(self, client: AsyncClient, make_basic_auth):
        response = await client.get("/maintenance", headers=make_basic_auth("user", "wrong"))

        assert response.status_code == 401

    async def test_unknown_user(self, client: AsyncClient, make_basic_auth):
        response = await client.get(
            "/maintenance", headers=make_basic_auth("mallory", "test_password")
        )

        assert response.status_code == 401

    async def test_malformed_header(self, client: AsyncClient):
        response = await client.get("/maintenance", headers={"Authorization": "Basic ###"})

        assert response.status_code == 401


@pytest.mark.anyio
class TestFormLogin:

    async def test_login_sets_http_only_cookie(self, client: AsyncClient):
        # Act
        response = await login(client)

        # Assert
        assert response.status_code == 200
        assert response.json() == {"username": "user", "authenticated": True}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{COOKIE}=")
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()

    async def test_cookie_authorizes_later_requests(self, client: AsyncClient):
        # Arrange
        await login(client)

        # Act
        response = await client.get("/maintenance")

        # Assert
        assert response.status_code == 200

    async def test_bad_credentials(self, client: AsyncClient):
        # Act
        response = await login(client, password="nope")

        # Assert
        assert response.status_code == 401
        assert response.json() == {"detail": "Bad credentials"}
        assert COOKIE not in response.cookies

    async def test_login_needs_no_csrf_token(self, client: AsyncClient):
        response = await login(client)

        assert response.status_code == 200

    async def test_logout_clears_cookie(self, client: AsyncClient):
        # Arrange
        await login(client)
        assert (await client.get("/maintenance")).status_code == 200

        # Act
        response = await client.post("/logout")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"detail": "Logged out"}
        assert (await client.get("/maintenance")).status_code == 401

    async def test_cookie_presented_after_logout_is_refused(self, client: AsyncClient):
        # Arrange
        token = (await login(client)).cookies[COOKIE]
        await client.post("/logout")

        # Act
        client.cookies.set(COOKIE, token)
        response = await client.get("/maintenance")

        # Assert
        assert response.status_code == 401

    async def test_logout_with_get_is_permitted_anonymously(self, client: AsyncClient):
        response = await client.get("/logout")

        assert response.status_code == 200

    async def test_forged_cookie_is_rejected(self, client: AsyncClient):
        # Arrange
        client.cookies.set(COOKIE, "eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiJ1c2VyIn0.forged")

        # Act
        response = await client.get("/maintenance")

        # Assert
        assert response.status_code == 401

    async def test_expired_cookie_is_rejected(self, client: AsyncClient):
        # Arrange
        client.cookies.set(COOKIE, create_session_token("user", timedelta(minutes=-5)))

        # Act
        response = await client.get("/maintenance")

        # Assert
        assert response.status_code == 401

    async def test_bad_basic_header_overrides_valid_cookie(
        self, client: AsyncClient, make_basic_auth
    ):
        # Arrange
        await login(client)

        # Act
        response = await client.get("/maintenance", headers=make_basic_auth("user", "wrong"))

        # Assert
        assert response.status_code == 401
