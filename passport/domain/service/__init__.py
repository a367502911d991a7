"""Domain services."""

from .account_service import AccountService, require_privileged
from .account_state import AdvisorOutcome
from .auth_service import AuthService, OAuthClient
from .base import Service
from .identity_service import IdentityResolver
from .password import PasswordHasher
from .social_profile import normalize_profile, parse_provider
from .token_service import TokenPair, TokenService

__all__ = [
    "AccountService",
    "AdvisorOutcome",
    "AuthService",
    "IdentityResolver",
    "OAuthClient",
    "PasswordHasher",
    "Service",
    "TokenPair",
    "TokenService",
    "normalize_profile",
    "parse_provider",
    "require_privileged",
]
