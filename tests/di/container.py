"""Container builder for tests."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from passport.util.di import PROVIDERS, Component, get_provider


def _component(base) -> Component | None:
    if not base.__subclasses__():
        return None
    return getattr(base, "__mock_component__", None)


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where swappable components use test doubles.

    In-memory identities and blacklist plus stubbed OAuth clients are the
    default. Components named in ``unmock`` use their production providers,
    e.g. ``build_test_container(unmock={"persistence"})`` for PostgreSQL
    repository tests.

    Raises:
        ValueError: If ``unmock`` names an unknown component, or leaves out
            one that an unmocked component depends on
    """
    unmock = unmock or set()
    _check_unmock(unmock)

    providers = []
    for base in PROVIDERS:
        component = _component(base)
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers, FastapiProvider())


def _check_unmock(unmock: set[Component]) -> None:
    swappable = [base for base in PROVIDERS if _component(base)]
    known = {_component(base) for base in swappable}

    unknown = unmock - known
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    for base in swappable:
        component = _component(base)
        if component not in unmock:
            continue
        missing = set(getattr(base, "__depends_on__", set())) - unmock
        if missing:
            raise ValueError(
                f"Component '{component}' requires {sorted(missing)} to be unmocked"
            )
