"""Shared pytest fixtures.

Unit tests run the services against an in-memory row store; Postgres-backed
fixtures live in ``tests/integration/conftest.py``.
"""

import pytest

from tests.helpers import InMemoryRowStore


@pytest.fixture()
def store() -> InMemoryRowStore:
    """Provide an empty in-memory row store."""
    return InMemoryRowStore()


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Ensure HTTPX uses asyncio backend during tests."""
    return "asyncio"
