"""Unit tests for the local session use cases."""

import pytest

from passport.application.usecase.session import (
    AuthenticateUseCase,
    LoginUseCase,
    LogoutUseCase,
    RefreshUseCase,
    SignupUseCase,
)
from passport.application.usecase.session.authenticate import AuthenticateRequest
from passport.application.usecase.session.login import LoginRequest
from passport.application.usecase.session.logout import LogoutRequest
from passport.application.usecase.session.refresh import RefreshRequest
from passport.application.usecase.session.signup import SignupRequest
from passport.domain.error import (
    DuplicateHandleError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def signup_and_login(unit_env, handle: str = "alice"):
    signup = await unit_env.get(SignupUseCase)
    login = await unit_env.get(LoginUseCase)
    await signup.execute(
        SignupRequest(
            login_handle=handle,
            password="pw-123",
            display_name="Alice",
            contact_id="alice#1",
        )
    )
    return await login.execute(LoginRequest(login_handle=handle, password="pw-123"))


class TestSignupAndLogin:
    @pytest.mark.asyncio
    async def test_login_returns_summary_and_pair(self, unit_env):
        session = await signup_and_login(unit_env)

        assert session.display_name == "Alice"
        assert session.contact_id == "alice#1"
        assert session.email is None
        assert session.access_token != session.refresh_token

    @pytest.mark.asyncio
    async def test_duplicate_signup(self, unit_env):
        await signup_and_login(unit_env)
        signup = await unit_env.get(SignupUseCase)

        with pytest.raises(DuplicateHandleError):
            await signup.execute(
                SignupRequest(login_handle="alice", password="x", display_name="A2")
            )

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        await signup_and_login(unit_env)
        login = await unit_env.get(LoginUseCase)

        with pytest.raises(InvalidCredentialsError):
            await login.execute(LoginRequest(login_handle="alice", password="wrong"))


class TestRefreshAndLogout:
    @pytest.mark.asyncio
    async def test_refresh_once(self, unit_env):
        """A refresh token should be exchangeable exactly once."""
        session = await signup_and_login(unit_env)
        refresh = await unit_env.get(RefreshUseCase)

        renewed = await refresh.execute(
            RefreshRequest(refresh_token=session.refresh_token)
        )

        assert renewed.identity_id == session.identity_id
        assert renewed.display_name == "Alice"
        with pytest.raises(InvalidTokenError):
            await refresh.execute(RefreshRequest(refresh_token=session.refresh_token))

    @pytest.mark.asyncio
    async def test_logout_invalidates_session(self, unit_env):
        session = await signup_and_login(unit_env)
        logout = await unit_env.get(LogoutUseCase)
        authenticate = await unit_env.get(AuthenticateUseCase)
        refresh = await unit_env.get(RefreshUseCase)

        caller = await authenticate.execute(
            AuthenticateRequest(access_token=session.access_token)
        )
        assert str(caller.identity_id) == session.identity_id

        await logout.execute(
            LogoutRequest(
                access_token=session.access_token,
                refresh_token=session.refresh_token,
            )
        )

        with pytest.raises(InvalidTokenError):
            await authenticate.execute(
                AuthenticateRequest(access_token=session.access_token)
            )
        with pytest.raises(InvalidTokenError):
            await refresh.execute(RefreshRequest(refresh_token=session.refresh_token))

    @pytest.mark.asyncio
    async def test_logout_without_tokens_succeeds(self, unit_env):
        logout = await unit_env.get(LogoutUseCase)

        await logout.execute(LogoutRequest())
