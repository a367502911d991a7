"""In-memory repository implementations for testing."""

from .identity import InMemoryIdentityRepository
from .token_blacklist import InMemoryTokenBlacklistStore

__all__ = [
    "InMemoryIdentityRepository",
    "InMemoryTokenBlacklistStore",
]
