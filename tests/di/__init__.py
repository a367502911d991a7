"""Mock providers for testing."""

from .cache import MockCacheProvider
from .container import build_test_container
from .oauth import MockOAuthProvider
from .persistence import MockPersistenceProvider

__all__ = [
    "MockCacheProvider",
    "MockOAuthProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
