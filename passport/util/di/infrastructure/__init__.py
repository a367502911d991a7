"""Infrastructure providers."""

# Import bases
from .cache import CacheProvider
from .oauth import OAuthProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .cache import ProdCacheProvider  # noqa: F401
from .oauth import ProdOAuthProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "CacheProvider",
    "OAuthProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdOAuthProvider",
    "ProdPersistenceProvider",
]
