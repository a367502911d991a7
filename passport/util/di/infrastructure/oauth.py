"""OAuth infrastructure providers for social login."""

from dishka import Scope, provide

from passport.adapter.oauth.client import RealOAuthClient
from passport.config import Settings
from passport.domain.service.auth_service import OAuthClient
from passport.domain.value import SocialProvider
from passport.util.di.base import ProviderBase


class OAuthProvider(ProviderBase):
    """OAuth component base."""

    __mock_component__ = "oauth"


class ProdOAuthProvider(OAuthProvider):
    """Production OAuth provider with one httpx client per social provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_oauth_clients(self, settings: Settings) -> dict[SocialProvider, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider.

        Returns:
            Dictionary mapping SocialProvider to OAuthClient
        """
        auth = settings.auth
        provider_settings = {
            SocialProvider.KAKAO: auth.kakao,
            SocialProvider.GOOGLE: auth.google,
            SocialProvider.NAVER: auth.naver,
        }
        return {
            provider: RealOAuthClient(
                provider=provider,
                settings=config,
                redirect_uri=f"{auth.oauth_callback_base_url}/{provider.value}/callback",
                state_ttl_seconds=auth.oauth_state_ttl_seconds,
                max_pending_states=auth.oauth_max_pending_states,
            )
            for provider, config in provider_settings.items()
        }
