#!/usr/bin/env python3
"""Tests for RedisManager command delegation."""
import logging
from unittest.mock import AsyncMock, patch

import pytest

from redisdemo.manager import RedisManager


@pytest.mark.asyncio
async def test_set_without_expiry_uses_set(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test set without an expiry issues SET."""
    await manager.set("greeting", "hello")

    mock_client.set.assert_awaited_once_with("greeting", "hello")
    mock_client.setex.assert_not_awaited()


@pytest.mark.asyncio
async def test_set_with_expiry_uses_setex(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test set with an expiry issues SETEX with the seconds."""
    await manager.set("greeting", "hello", 300)

    mock_client.setex.assert_awaited_once_with("greeting", 300, "hello")
    mock_client.set.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_returns_value(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test get returns the stored value, or None when missing."""
    mock_client.get.side_effect = ["hello", None]

    assert await manager.get("greeting") == "hello"
    assert await manager.get("missing") is None


@pytest.mark.asyncio
async def test_delete_returns_count(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test delete returns the number of removed keys."""
    mock_client.delete.return_value = 1

    assert await manager.delete("greeting") == 1
    mock_client.delete.assert_awaited_once_with("greeting")


@pytest.mark.asyncio
@pytest.mark.parametrize(("count", "expected"), [(1, True), (0, False)])
async def test_exists_returns_bool(
    manager: RedisManager, mock_client: AsyncMock, count: int, expected: bool
) -> None:
    """Test exists converts the key count to a boolean."""
    mock_client.exists.return_value = count

    assert await manager.exists("greeting") is expected


@pytest.mark.asyncio
async def test_hash_operations(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test hset, hget and hgetall delegate to the client."""
    mock_client.hset.return_value = 1
    mock_client.hget.return_value = "Tom"
    mock_client.hgetall.return_value = {"name": "Tom", "age": "30"}

    assert await manager.hset("user:1", "name", "Tom") == 1
    assert await manager.hget("user:1", "name") == "Tom"
    assert await manager.hgetall("user:1") == {"name": "Tom", "age": "30"}
    mock_client.hset.assert_awaited_once_with("user:1", "name", "Tom")
    mock_client.hget.assert_awaited_once_with("user:1", "name")


@pytest.mark.asyncio
async def test_list_operations(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test lpush passes all values and lrange defaults to the whole list."""
    mock_client.lpush.return_value = 2
    mock_client.lrange.return_value = ["b", "a"]
    mock_client.lpop.return_value = "b"

    assert await manager.lpush("tasks", "a", "b") == 2
    assert await manager.lrange("tasks") == ["b", "a"]
    assert await manager.lpop("tasks") == "b"
    mock_client.lpush.assert_awaited_once_with("tasks", "a", "b")
    mock_client.lrange.assert_awaited_once_with("tasks", 0, -1)


@pytest.mark.asyncio
async def test_lrange_with_bounds(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test lrange forwards explicit start and stop."""
    mock_client.lrange.return_value = ["a"]

    await manager.lrange("tasks", 1, 2)

    mock_client.lrange.assert_awaited_once_with("tasks", 1, 2)


@pytest.mark.asyncio
async def test_utility_operations(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test ping and flushall return the client's responses."""
    mock_client.ping.return_value = True
    mock_client.flushall.return_value = True

    assert await manager.ping() is True
    assert await manager.flushall() is True


@pytest.mark.asyncio
async def test_connect_sets_status(manager: RedisManager, mock_client: AsyncMock) -> None:
    """Test a successful connect marks the manager connected."""
    assert manager.is_connected is False

    with patch("redisdemo.manager.open_connection", new_callable=AsyncMock) as mock_open:
        await manager.connect()

    mock_open.assert_awaited_once_with(mock_client)
    assert manager.is_connected is True


@pytest.mark.asyncio
async def test_disconnect_closes_when_connected(
    manager: RedisManager, mock_client: AsyncMock
) -> None:
    """Test disconnect closes the client and clears the status."""
    with patch("redisdemo.manager.open_connection", new_callable=AsyncMock):
        await manager.connect()

    await manager.disconnect()

    mock_client.aclose.assert_awaited_once()
    assert manager.is_connected is False


@pytest.mark.asyncio
async def test_disconnect_without_connection_closes_pool_quietly(
    manager: RedisManager, mock_client: AsyncMock, caplog: pytest.LogCaptureFixture
) -> None:
    """Test disconnect releases the pool but logs nothing when not connected."""
    with caplog.at_level(logging.INFO, logger="redisdemo.manager"):
        await manager.disconnect()

    mock_client.aclose.assert_awaited_once()
    assert "Redis connection closed" not in caplog.text


def test_default_client_uses_settings_url() -> None:
    """Test the manager builds its own client from the settings URL."""
    with patch("redisdemo.manager.Redis.from_url") as mock_from_url:
        manager = RedisManager()

    mock_from_url.assert_called_once()
    assert mock_from_url.call_args.args[0] == "redis://localhost:6379"
    assert mock_from_url.call_args.kwargs["decode_responses"] is True
    assert manager.settings.url == "redis://localhost:6379"
