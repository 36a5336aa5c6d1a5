#!/usr/bin/env python3
"""Object facade over a subset of the Redis command set.

RedisManager wraps a redis.asyncio client and exposes string, hash, list
and utility commands. Each command logs its result; failures are logged
with the key involved and re-raised unchanged. The manager owns the
connection status flag and is the only code that updates it.

See connection.py for how the connection is established.
"""

from __future__ import annotations

import logging

from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from redisdemo.connection import open_connection
from redisdemo.settings import RedisSettings

logger = logging.getLogger(__name__)


def create_client(settings: RedisSettings) -> Redis:
    """Create a redis.asyncio client for the configured URL.

    Library-level retries are disabled so that reconnection is governed
    by the reconnect policy alone.

    Args:
        settings: Connection settings.

    Returns:
        An unconnected client that decodes responses to str.
    """
    return Redis.from_url(
        settings.url,
        decode_responses=True,
        retry=Retry(NoBackoff(), 0),
    )


class RedisManager:
    """Facade exposing Redis commands with logging.

    Attributes:
        settings: Connection settings the client was created from.
    """

    def __init__(self, settings: RedisSettings | None = None, client: Redis | None = None):
        self.settings = settings or RedisSettings()
        self._client = client if client is not None else create_client(self.settings)
        self._connected = False

    @property
    def is_connected(self) -> bool:
        """True between a successful connect and disconnect or a lost connection."""
        return self._connected

    def _failed(self, exc: BaseException, message: str, *args: object) -> None:
        logger.error(message + ": %s", *args, exc)
        if isinstance(exc, (RedisConnectionError, RedisTimeoutError)):
            self._connected = False

    async def connect(self) -> None:
        """Connect to the server, retrying per the reconnect policy.

        Raises:
            FatalConnectionError: If the reconnect policy gives up.
        """
        try:
            await open_connection(self._client)
        except (RedisError, ConnectionError) as e:
            self._connected = False
            logger.error("Failed to connect to Redis: %s", e)
            raise
        self._connected = True
        logger.info("Redis client is ready")

    async def disconnect(self) -> None:
        """Release the client's connection pool.

        The pool is closed even after a lost connection has cleared the
        status, so sockets are not left open.
        """
        was_connected = self._connected
        await self._client.aclose()
        self._connected = False
        if was_connected:
            logger.info("Redis connection closed")

    # String operations

    async def set(self, key: str, value: str, expire_in_seconds: int | None = None) -> None:
        """Set a string value, with an expiry in seconds when given."""
        try:
            if expire_in_seconds:
                await self._client.setex(key, expire_in_seconds, value)
            else:
                await self._client.set(key, value)
        except RedisError as e:
            self._failed(e, "Error setting key %s", key)
            raise
        logger.info("Set key: %s = %s", key, value)

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as e:
            self._failed(e, "Error getting key %s", key)
            raise
        logger.info("Get key: %s = %s", key, value)
        return value

    async def delete(self, key: str) -> int:
        """Delete a key, returning the number of keys removed."""
        try:
            result = await self._client.delete(key)
        except RedisError as e:
            self._failed(e, "Error deleting key %s", key)
            raise
        logger.info("Deleted key: %s, result: %s", key, result)
        return result

    async def exists(self, key: str) -> bool:
        try:
            count = await self._client.exists(key)
        except RedisError as e:
            self._failed(e, "Error checking if key %s exists", key)
            raise
        return count == 1

    # Hash operations

    async def hset(self, key: str, field: str, value: str) -> int:
        """Set a hash field, returning the number of fields added."""
        try:
            result = await self._client.hset(key, field, value)
        except RedisError as e:
            self._failed(e, "Error setting hash %s.%s", key, field)
            raise
        logger.info("Hash set: %s.%s = %s", key, field, value)
        return result

    async def hget(self, key: str, field: str) -> str | None:
        try:
            value = await self._client.hget(key, field)
        except RedisError as e:
            self._failed(e, "Error getting hash %s.%s", key, field)
            raise
        logger.info("Hash get: %s.%s = %s", key, field, value)
        return value

    async def hgetall(self, key: str) -> dict[str, str]:
        try:
            mapping = await self._client.hgetall(key)
        except RedisError as e:
            self._failed(e, "Error getting all hash fields for %s", key)
            raise
        logger.info("Hash getall: %s = %s", key, mapping)
        return mapping

    # List operations

    async def lpush(self, key: str, *values: str) -> int:
        """Push values onto the head of a list, returning its new length."""
        try:
            result = await self._client.lpush(key, *values)
        except RedisError as e:
            self._failed(e, "Error pushing to list %s", key)
            raise
        logger.info("List push: %s <- [%s]", key, ", ".join(values))
        return result

    async def lpop(self, key: str) -> str | None:
        try:
            value = await self._client.lpop(key)
        except RedisError as e:
            self._failed(e, "Error popping from list %s", key)
            raise
        logger.info("List pop: %s -> %s", key, value)
        return value

    async def lrange(self, key: str, start: int = 0, stop: int = -1) -> list[str]:
        """Return list elements from start to stop inclusive (whole list by default)."""
        try:
            items = await self._client.lrange(key, start, stop)
        except RedisError as e:
            self._failed(e, "Error getting list range %s", key)
            raise
        logger.info("List range: %s[%d:%d] = %s", key, start, stop, items)
        return items

    # Utility operations

    async def ping(self) -> bool:
        try:
            response = await self._client.ping()
        except RedisError as e:
            self._failed(e, "Error pinging Redis")
            raise
        logger.info("Redis ping: %s", response)
        return response

    async def flushall(self) -> bool:
        """Remove every key from every database on the server."""
        try:
            response = await self._client.flushall()
        except RedisError as e:
            self._failed(e, "Error flushing Redis")
            raise
        logger.info("Flushed all Redis data")
        return response
