"""Repository interfaces for the domain layer."""

from passport.domain.repository.identity import IdentityRepository
from passport.domain.repository.token_blacklist import TokenBlacklistStore

__all__ = [
    "IdentityRepository",
    "TokenBlacklistStore",
]
