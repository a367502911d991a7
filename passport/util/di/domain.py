"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from passport.config import AuthSettings
from passport.domain.repository import IdentityRepository, TokenBlacklistStore
from passport.domain.service import (
    AccountService,
    AuthService,
    IdentityResolver,
    OAuthClient,
    PasswordHasher,
    TokenService,
)
from passport.domain.value import SocialProvider
from passport.util.di.base import ProviderBase
from passport.util.jwt import TokenCodec


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[SocialProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider social authentication service."""
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_token_service(
        self,
        codec: TokenCodec,
        blacklist: TokenBlacklistStore,
        auth_settings: AuthSettings,
    ) -> TokenService:
        """Provide token lifecycle service."""
        return TokenService(
            codec=codec,
            blacklist=blacklist,
            access_ttl=timedelta(minutes=auth_settings.access_token_ttl_minutes),
            refresh_ttl=timedelta(days=auth_settings.refresh_token_ttl_days),
        )

    @provide
    def get_identity_resolver(
        self,
        identity_repository: IdentityRepository,
        password_hasher: PasswordHasher,
        auth_settings: AuthSettings,
    ) -> IdentityResolver:
        """Provide identity resolution service."""
        return IdentityResolver(
            identity_repository=identity_repository,
            password_hasher=password_hasher,
            handle_generation_attempts=auth_settings.handle_generation_attempts,
        )

    @provide
    def get_account_service(
        self,
        identity_repository: IdentityRepository,
        password_hasher: PasswordHasher,
    ) -> AccountService:
        """Provide account state service."""
        return AccountService(
            identity_repository=identity_repository, password_hasher=password_hasher
        )
