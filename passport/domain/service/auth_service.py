"""Social authentication domain service."""

from typing import Any

import logfire

from passport.domain.error import UnsupportedProviderError
from passport.domain.value import SocialProfile, SocialProvider

from .base import Service
from .social_profile import normalize_profile, parse_provider


class OAuthClient:
    """Generic OAuth 2.0 authorization-code client interface."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def fetch_profile_attributes(self, code: str, state: str) -> dict[str, Any]:
        """Exchange the authorization code and fetch the raw user-info document.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter echoed back by the provider

        Returns:
            Provider-specific user attributes
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider social authentication.

    Dispatches the OAuth handshake to the provider's client and normalizes
    what comes back.
    """

    def __init__(self, oauth_clients: dict[SocialProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client_for(self, provider_key: str) -> tuple[SocialProvider, OAuthClient]:
        provider = parse_provider(provider_key)
        client = self.oauth_clients.get(provider)
        if client is None:
            raise UnsupportedProviderError(provider_key)
        return provider, client

    async def initiate_login(self, provider_key: str, state: str) -> str:
        """Initiate OAuth login flow for any provider.

        Args:
            provider_key: Provider key, matched case-insensitively
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        _, client = self._client_for(provider_key)
        return await client.initiate_authorization(state)

    async def complete_login(
        self, provider_key: str, code: str, state: str
    ) -> SocialProfile:
        """Complete OAuth login flow and normalize the provider profile.

        Args:
            provider_key: Provider key from the callback path
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Normalized social profile

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        provider, client = self._client_for(provider_key)
        with logfire.span("auth_service.complete_login", provider=provider.value):
            attributes = await client.fetch_profile_attributes(code, state)
            profile = normalize_profile(provider, attributes)
            logfire.info(
                "Social profile normalized",
                provider=provider.value,
                provider_user_id=profile.provider_user_id,
                has_email=profile.email is not None,
            )
            return profile
