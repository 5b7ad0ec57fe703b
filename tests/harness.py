"""Test harness for use case tests.

Everything runs in memory, so no external services are needed.
"""

import pytest_asyncio

from threadline.config import Settings
from threadline.util.di.container import create_container


def create_env_fixture(settings: Settings | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds the application container with the given settings
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Each test gets a fresh container, and with it an empty event store.

    Args:
        settings: Settings to run with (test defaults if omitted)

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()
        flat_env = create_env_fixture(
            Settings(environment="test", threading={"max_depth": 0})
        )

        @pytest.mark.asyncio
        async def test_thread(unit_env):
            repo = await unit_env.get(EventRepository)
            await repo.save(make_event("r1"))
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = create_container(settings or Settings(environment="test"))
        try:
            async with container() as request_container:
                yield request_container
        finally:
            await container.close()

    return _test_environment
