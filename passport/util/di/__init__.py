"""Provider registry for the passport container.

Identity storage, the token blacklist and the social OAuth clients each have
a production and a test implementation. Everything else is wired the same
way in every environment.
"""

from typing import Type

from passport.util.di.application import ProdApplicationProvider
from passport.util.di.base import Component, ProviderBase
from passport.util.di.core import ProdConfigProvider
from passport.util.di.domain import ProdDomainProvider
from passport.util.di.infrastructure import (
    CacheProvider,
    OAuthProvider,
    PersistenceProvider,
    ProdCacheProvider,
    ProdOAuthProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable for in-memory or stubbed versions in tests
    PersistenceProvider,
    CacheProvider,
    OAuthProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a registry entry to the provider class to instantiate.

    An entry without subclasses is used as is. An entry with subclasses is a
    swappable component, and the subclass whose ``__is_mock__`` matches
    ``use_mock`` is returned.

    Raises:
        ValueError: If the component has no implementation of the requested kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for candidate in implementations:
        if getattr(candidate, "__is_mock__", False) == use_mock:
            return candidate

    kind = "test" if use_mock else "production"
    component = getattr(base, "__mock_component__", None) or base.__name__
    raise ValueError(f"No {kind} implementation registered for {component}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "CacheProvider",
    "OAuthProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdOAuthProvider",
    "ProdPersistenceProvider",
]
