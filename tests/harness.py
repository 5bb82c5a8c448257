"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables (configure via .env or export).
Integration tests that unmock ``persistence`` assume a Postgres at
``DATABASE__URL`` with migrations applied.
"""

import pytest_asyncio

from pairnotes.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Stops any pair sessions the test started before closing the container

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_accept_invite(unit_env):
            invite_service = await unit_env.get(InviteService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        from pairnotes.application.session import SessionRegistry

        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container
            registry = await request_container.get(SessionRegistry)
            await registry.stop_all()

        await container.close()

    return _test_environment
