"""Mock OAuth providers for testing."""

from dishka import Scope, provide

from passport.adapter.oauth.client import MockOAuthClient
from passport.domain.service import OAuthClient
from passport.domain.value import SocialProvider
from passport.util.di.infrastructure.oauth import OAuthProvider


class MockOAuthProvider(OAuthProvider):
    """Mock OAuth provider; the authorization code picks the social user."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_oauth_clients(self) -> dict[SocialProvider, OAuthClient]:
        """Provide mock OAuth clients for every provider."""
        return {provider: MockOAuthClient(provider) for provider in SocialProvider}
