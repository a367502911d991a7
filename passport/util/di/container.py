"""Production container for the passport API."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from passport.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with PostgreSQL identities, the configured blacklist backend
    and live OAuth clients. Settings come from the environment."""
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    setup_dishka(container, app)
