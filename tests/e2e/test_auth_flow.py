"""End-to-end tests for authentication flow."""

import httpx
import pytest
import pytest_asyncio

from passport.interface.api.app import create_app
from tests.di import build_test_container


@pytest_asyncio.fixture
async def client():
    """Create test client backed by a fresh mocked container."""
    container = build_test_container()
    app = create_app(container=container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    await container.close()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def signup_and_login(client, handle: str = "alice", password: str = "Pw1!"):
    response = await client.post(
        "/auth/signup",
        json={"login_handle": handle, "password": password, "display_name": "Alice"},
    )
    assert response.status_code == 201
    response = await client.post(
        "/auth/login", json={"login_handle": handle, "password": password}
    )
    assert response.status_code == 200
    return response.json()


class TestLocalAuthFlow:
    """End-to-end tests for signup, login, refresh and logout."""

    @pytest.mark.asyncio
    async def test_signup_login_and_me(self, client):
        session = await signup_and_login(client)

        assert session["display_name"] == "Alice"
        assert session["roles"] == ["USER"]

        response = await client.get("/auth/me", headers=bearer(session["access_token"]))
        assert response.status_code == 200
        me = response.json()
        assert me["login_handle"] == "alice"
        assert me["password_initialized"] is True
        assert me["points"] == 0

    @pytest.mark.asyncio
    async def test_duplicate_signup(self, client):
        await signup_and_login(client)

        response = await client.post(
            "/auth/signup",
            json={"login_handle": "alice", "password": "x", "display_name": "A"},
        )

        assert response.status_code == 409
        assert response.json()["code"] == "DUPLICATE_HANDLE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"login_handle": "   ", "password": "Pw1!", "display_name": "Alice"},
            {"login_handle": "alice", "password": "Pw1!", "display_name": "   "},
        ],
    )
    async def test_signup_rejects_blank_fields(self, client, body):
        response = await client.post("/auth/signup", json=body)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FIELD"

        login = await client.post(
            "/auth/login", json={"login_handle": "alice", "password": "Pw1!"}
        )
        assert login.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_handle_identical(self, client):
        await signup_and_login(client)

        wrong = await client.post(
            "/auth/login", json={"login_handle": "alice", "password": "nope"}
        )
        unknown = await client.post(
            "/auth/login", json={"login_handle": "nobody", "password": "Pw1!"}
        )

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(self, client):
        session = await signup_and_login(client)

        response = await client.post(
            "/auth/refresh", headers=bearer(session["access_token"])
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_refresh_token_single_use(self, client):
        session = await signup_and_login(client)

        first = await client.post(
            "/auth/refresh", headers=bearer(session["refresh_token"])
        )
        replay = await client.post(
            "/auth/refresh", headers=bearer(session["refresh_token"])
        )

        assert first.status_code == 200
        assert first.json()["identity_id"] == session["identity_id"]
        assert replay.status_code == 401

        chained = await client.post(
            "/auth/refresh", headers=bearer(first.json()["refresh_token"])
        )
        assert chained.status_code == 200

    @pytest.mark.asyncio
    async def test_refresh_without_token(self, client):
        response = await client.post("/auth/refresh")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_revokes_tokens(self, client):
        session = await signup_and_login(client)

        response = await client.post(
            "/auth/logout",
            headers={
                **bearer(session["access_token"]),
                "X-Refresh-Token": session["refresh_token"],
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Successfully logged out",
        }
        me = await client.get("/auth/me", headers=bearer(session["access_token"]))
        assert me.status_code == 401
        refresh = await client.post(
            "/auth/refresh", headers=bearer(session["refresh_token"])
        )
        assert refresh.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_always_succeeds(self, client):
        """Logout without or with garbage tokens still reports success."""
        bare = await client.post("/auth/logout")
        garbage = await client.post(
            "/auth/logout",
            headers={"Authorization": "Bearer garbage", "X-Refresh-Token": "junk"},
        )

        assert bare.status_code == 200
        assert garbage.status_code == 200
        assert garbage.json()["success"] is True


class TestSocialAuthFlow:
    """End-to-end tests for the OAuth social login flow."""

    @pytest.mark.asyncio
    async def test_authorize_url(self, client):
        response = await client.get("/auth/oauth/google/authorize")

        assert response.status_code == 200
        data = response.json()
        assert "mock=true" in data["authorization_url"]
        assert f"state={data['state']}" in data["authorization_url"]

    @pytest.mark.asyncio
    async def test_unsupported_provider(self, client):
        response = await client.get("/auth/oauth/github/authorize")

        assert response.status_code == 400
        assert response.json()["code"] == "UNSUPPORTED_PROVIDER"

    @pytest.mark.asyncio
    async def test_callback_creates_and_reuses_identity(self, client):
        first = await client.get(
            "/auth/oauth/kakao/callback", params={"code": "bob", "state": "s1"}
        )
        second = await client.get(
            "/auth/oauth/KAKAO/callback", params={"code": "bob", "state": "s2"}
        )

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["identity_id"] == second.json()["identity_id"]
        assert first.json()["email"] == "bob@kakao.example"

        me = await client.get("/auth/me", headers=bearer(first.json()["access_token"]))
        assert me.json()["login_handle"].startswith("kakao_")
        assert me.json()["password_initialized"] is False
        assert me.json()["linked_providers"] == ["kakao"]
