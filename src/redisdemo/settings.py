#!/usr/bin/env python3
"""Connection settings loaded from the environment.

REDIS_URL selects the server; a .env file is read first so the variable
can live next to the project instead of in the shell.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL: str = "redis://localhost:6379"

REDIS_URL_ENV: str = "REDIS_URL"


@dataclass(frozen=True)
class RedisSettings:
    """Settings for reaching the Redis server.

    Attributes:
        url: Redis connection URL (redis:// or rediss://).
    """

    url: str = DEFAULT_REDIS_URL


def load_settings(env_file: str | None = None, url: str | None = None) -> RedisSettings:
    """Load settings from a .env file and the process environment.

    Precedence: explicit url argument, then REDIS_URL, then the default.
    Variables already set in the environment are not overridden by the
    .env file.

    Args:
        env_file: Path to a .env file, or None to search for one.
        url: Explicit URL that takes precedence over the environment.

    Returns:
        The resolved RedisSettings.
    """
    if load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True)):
        logger.debug("Loaded environment from %s", env_file or ".env")
    if url:
        return RedisSettings(url=url)
    return RedisSettings(url=os.environ.get(REDIS_URL_ENV) or DEFAULT_REDIS_URL)
