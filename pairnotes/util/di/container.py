"""Production container and FastAPI wiring."""

import logfire
from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from pairnotes.util.di import PROVIDERS, get_provider


def create_container(*extra_providers: Provider) -> AsyncContainer:
    """Build the container with the production implementation of every component.

    The FastAPI request provider is always included, since the API is the
    only entry point that builds this container.

    Args:
        extra_providers: Providers appended after the production ones

    Returns:
        Configured DI container
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    logfire.debug(
        "Building production container",
        providers=[type(p).__name__ for p in providers],
    )
    return make_async_container(*providers, FastapiProvider(), *extra_providers)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; routes resolve through ``FromDishka``."""
    setup_dishka(container, app)
