"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from passport.adapter.bcrypt.hasher import BcryptPasswordHasher
from passport.config import AuthSettings, Settings
from passport.domain.service import PasswordHasher
from passport.util.di.base import ProviderBase
from passport.util.error import ConfigurationError
from passport.util.jwt import TokenCodec

PLACEHOLDER_SECRET = "CHANGE_ME_IN_PRODUCTION"


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_token_codec(
        self, settings: Settings, auth_settings: AuthSettings
    ) -> TokenCodec:
        """Provide the token codec, holding the signing key for the process lifetime."""
        if (
            auth_settings.jwt_secret == PLACEHOLDER_SECRET
            and settings.environment == "production"
        ):
            raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
        return TokenCodec(
            secret=auth_settings.jwt_secret, algorithm=auth_settings.jwt_algorithm
        )

    @provide(scope=Scope.APP)
    def provide_password_hasher(self, auth_settings: AuthSettings) -> PasswordHasher:
        """Provide bcrypt password hasher."""
        return BcryptPasswordHasher(rounds=auth_settings.bcrypt_rounds)
