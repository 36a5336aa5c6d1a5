#!/usr/bin/env python3
"""Pytest fixtures for redisdemo tests.

Provides a mocked redis.asyncio client and a RedisManager wired to it,
so no Redis server is needed.
"""

from unittest.mock import AsyncMock

import pytest

from redisdemo.manager import RedisManager
from redisdemo.settings import RedisSettings


@pytest.fixture
def mock_client() -> AsyncMock:
    """Create a mock redis.asyncio client; every command is awaitable."""
    return AsyncMock()


@pytest.fixture
def manager(mock_client: AsyncMock) -> RedisManager:
    """Create a RedisManager backed by the mock client."""
    return RedisManager(RedisSettings(url="redis://localhost:6379"), client=mock_client)
