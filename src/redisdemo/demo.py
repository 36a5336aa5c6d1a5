#!/usr/bin/env python3
"""Scripted demonstration of the RedisManager facade.

Runs a fixed sequence of string, hash, list and utility commands against
the configured server and echoes what comes back.
"""

from __future__ import annotations

import logging

import click
from redis.exceptions import RedisError

from redisdemo.manager import RedisManager

logger = logging.getLogger(__name__)

# Expiry for the demo greeting key (five minutes).
GREETING_TTL_SECONDS: int = 300


async def demonstrate_operations(manager: RedisManager) -> bool:
    """Run the demo sequence against a manager.

    A failed command is reported and stops the sequence. The manager is
    always disconnected afterwards.

    Args:
        manager: The RedisManager to exercise.

    Returns:
        True if every step completed, False if a command failed.

    Raises:
        FatalConnectionError: If the server cannot be reached.
    """
    try:
        await manager.connect()

        click.echo("\n=== Basic String Operations ===")
        await manager.set("greeting", "Hello, Redis!", GREETING_TTL_SECONDS)
        greeting = await manager.get("greeting")
        click.echo(f"Retrieved greeting: {greeting}")

        click.echo("\n=== Hash Operations ===")
        await manager.hset("user:1", "name", "Tom")
        await manager.hset("user:1", "email", "tom@example.com")
        await manager.hset("user:1", "age", "30")
        click.echo(f"User name: {await manager.hget('user:1', 'name')}")
        click.echo(f"All user data: {await manager.hgetall('user:1')}")

        click.echo("\n=== List Operations ===")
        await manager.lpush("tasks", "Learn Redis", "Build project", "Deploy to AWS")
        click.echo(f"All tasks: {await manager.lrange('tasks')}")
        click.echo(f"Next task: {await manager.lpop('tasks')}")

        click.echo("\n=== Utility Operations ===")
        click.echo(f"Ping response: {await manager.ping()}")
        click.echo(f"Greeting key exists: {await manager.exists('greeting')}")

        click.echo("\n=== Redis Demo Complete ===")
        return True
    except RedisError as e:
        logger.error("Demo failed: %s", e)
        return False
    finally:
        await manager.disconnect()
