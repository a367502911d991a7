"""OAuth 2.0 authorization-code clients for social login providers.

Kakao, Google and Naver all follow the plain authorization-code flow: the
user is redirected to the provider, the callback carries a code, the code is
exchanged for an access token, and the token fetches the user-info document.
"""

import time
import zlib
from collections.abc import Callable
from typing import Any
from urllib.parse import urlencode

import httpx
import logfire

from passport.adapter.error import OAuthProviderError
from passport.config import OAuthProviderSettings
from passport.domain.service.auth_service import OAuthClient
from passport.domain.value import SocialProvider


class SocialOAuthClient(OAuthClient):
    """Base class for social OAuth clients.

    Provides type distinction for dependency injection.
    """

    provider: SocialProvider


class RealOAuthClient(SocialOAuthClient):
    """OAuth 2.0 client talking to a provider over httpx."""

    def __init__(
        self,
        provider: SocialProvider,
        settings: OAuthProviderSettings,
        redirect_uri: str,
        timeout: float = 30.0,
        state_ttl_seconds: float = 600,
        max_pending_states: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize OAuth client.

        Args:
            provider: Which provider this client talks to
            settings: Client credentials and endpoints
            redirect_uri: Callback URL registered with the provider
            timeout: Per-request timeout in seconds
            state_ttl_seconds: How long an issued state stays redeemable
            max_pending_states: Oldest states are dropped beyond this count
            clock: Monotonic time source
        """
        self.provider = provider
        self.settings = settings
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self.state_ttl_seconds = state_ttl_seconds
        self.max_pending_states = max_pending_states
        self._clock = clock

        # State -> issue time, in issue order. A callback must present one of them
        self._pending_states: dict[str, float] = {}

    def _purge_states(self, now: float) -> None:
        cutoff = now - self.state_ttl_seconds
        for state, issued_at in list(self._pending_states.items()):
            if issued_at > cutoff:
                break
            del self._pending_states[state]
        while len(self._pending_states) > self.max_pending_states:
            del self._pending_states[next(iter(self._pending_states))]

    async def initiate_authorization(self, state: str) -> str:
        now = self._clock()
        self._pending_states.pop(state, None)
        self._pending_states[state] = now
        self._purge_states(now)
        params = {
            "response_type": "code",
            "client_id": self.settings.client_id,
            "redirect_uri": self.redirect_uri,
            "state": state,
        }
        if self.settings.scope:
            params["scope"] = self.settings.scope

        logfire.info(
            "OAuth authorization initiated",
            provider=self.provider.value,
            redirect_uri=self.redirect_uri,
        )
        return f"{self.settings.authorize_url}?{urlencode(params)}"

    async def fetch_profile_attributes(self, code: str, state: str) -> dict[str, Any]:
        """Exchange the code and fetch the user-info document.

        Raises:
            OAuthProviderError: If the state is unknown or a provider call fails
        """
        self._purge_states(self._clock())
        if self._pending_states.pop(state, None) is None:
            logfire.warn("OAuth callback with unknown state", provider=self.provider.value)
            raise OAuthProviderError(self.provider.value, "Invalid or expired state")

        access_token = await self._exchange_code_for_token(code, state)
        return await self._get_user_info(access_token)

    async def _exchange_code_for_token(self, code: str, state: str) -> str:
        data = {
            "grant_type": "authorization_code",
            "client_id": self.settings.client_id,
            "client_secret": self.settings.client_secret,
            "redirect_uri": self.redirect_uri,
            "code": code,
            "state": state,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.settings.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth token exchange HTTP error",
                provider=self.provider.value,
                error=str(e),
            )
            raise OAuthProviderError(
                self.provider.value, f"HTTP error during token exchange: {e}"
            )

        if response.status_code != 200:
            logfire.error(
                "OAuth token exchange failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise OAuthProviderError(
                self.provider.value, f"Token exchange failed: {response.status_code}"
            )

        access_token = response.json().get("access_token")
        if not access_token:
            raise OAuthProviderError(self.provider.value, "No access token in response")
        return access_token

    async def _get_user_info(self, access_token: str) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.settings.userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as e:
            logfire.error(
                "OAuth user info HTTP error", provider=self.provider.value, error=str(e)
            )
            raise OAuthProviderError(
                self.provider.value, f"HTTP error fetching user info: {e}"
            )

        if response.status_code != 200:
            logfire.error(
                "OAuth user info request failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise OAuthProviderError(
                self.provider.value, f"User info request failed: {response.status_code}"
            )
        return response.json()


class MockOAuthClient(SocialOAuthClient):
    """Mock OAuth client for testing.

    The authorization code doubles as the external user id, so tests can
    log in as distinct social users by varying the code.
    """

    def __init__(self, provider: SocialProvider) -> None:
        self.provider = provider

    async def initiate_authorization(self, state: str) -> str:
        params = {"state": state, "mock": "true"}
        return f"https://{self.provider.value}.example/oauth/authorize?{urlencode(params)}"

    async def fetch_profile_attributes(self, code: str, state: str) -> dict[str, Any]:
        _ = state
        name = f"Mock {code}"
        email = f"{code}@{self.provider.value}.example"
        if self.provider == SocialProvider.KAKAO:
            return {
                "id": zlib.crc32(code.encode("utf-8")),
                "kakao_account": {"email": email, "profile": {"nickname": name}},
            }
        if self.provider == SocialProvider.GOOGLE:
            return {"sub": f"google-{code}", "email": email, "name": name}
        return {"response": {"id": f"naver-{code}", "email": email, "nickname": name}}
