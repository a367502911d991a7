"""Repository implementations."""

from .identity import PostgresIdentityRepository
from .token_blacklist import RedisTokenBlacklistStore

__all__ = [
    "PostgresIdentityRepository",
    "RedisTokenBlacklistStore",
]
