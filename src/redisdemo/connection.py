#!/usr/bin/env python3
"""Connection driver with policy-governed reconnection.

This module opens the connection to the Redis server, retrying failed
attempts with tenacity. Every stop and wait decision is delegated to the
reconnect policy, and a fatal decision is surfaced as a
FatalConnectionError chained from the last transport error. Used by
RedisManager.connect.
"""

from __future__ import annotations

import errno
import logging
import re

from redis.asyncio import Redis
from redis.exceptions import AuthenticationError
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError
from tenacity import RetryCallState, retry, retry_if_exception_type, retry_if_not_exception_type

from redisdemo.reconnect_policy import ErrorKind, Fatal, RetryState, WaitThenRetry, decide

logger = logging.getLogger(__name__)

# Errors treated as transport failures worth another attempt.
RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    RedisConnectionError,
    RedisTimeoutError,
    OSError,
)

# Errno codes listed in socket error text, e.g. asyncio's
# "Multiple exceptions: [Errno 111] Connect call failed (...), ..." when a
# host resolves to several addresses, or redis-py's "Error 111 connecting to".
_ERRNO_IN_MESSAGE = re.compile(r"\[Errno (\d+)\]|Error (\d+) connecting to")


def _refused_by_message(exc: BaseException) -> bool:
    """True if the error text reports only ECONNREFUSED failures."""
    codes = [int(a or b) for a, b in _ERRNO_IN_MESSAGE.findall(str(exc))]
    return bool(codes) and all(code == errno.ECONNREFUSED for code in codes)


def classify_error(exc: BaseException | None) -> ErrorKind:
    """Classify an exception for the reconnect policy.

    Walks the cause/context chain, since the client library wraps the
    socket error in its own ConnectionError. When every address of a
    multi-address host refuses, asyncio raises a plain OSError without an
    errno; its text is checked for the per-address codes instead.

    Args:
        exc: Exception raised by the last attempt, or None.

    Returns:
        CONNECTION_REFUSED if the server refused the connection,
        NONE if there was no exception, TRANSPORT_ERROR otherwise.
    """
    if exc is None:
        return ErrorKind.NONE
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, ConnectionRefusedError):
            return ErrorKind.CONNECTION_REFUSED
        if isinstance(current, OSError) and current.errno == errno.ECONNREFUSED:
            return ErrorKind.CONNECTION_REFUSED
        if isinstance(current, OSError) and current.errno is None and _refused_by_message(current):
            return ErrorKind.CONNECTION_REFUSED
        if isinstance(current, RedisConnectionError) and _refused_by_message(current):
            return ErrorKind.CONNECTION_REFUSED
        current = current.__cause__ or current.__context__
    return ErrorKind.TRANSPORT_ERROR


def policy_state(retry_state: RetryCallState) -> RetryState:
    """Build the policy input from tenacity's record of the attempts.

    Args:
        retry_state: tenacity state after a failed attempt.

    Returns:
        RetryState with attempt count, elapsed milliseconds and error kind.
    """
    exc = None
    if retry_state.outcome is not None and retry_state.outcome.failed:
        exc = retry_state.outcome.exception()
    elapsed = retry_state.seconds_since_start or 0.0
    return RetryState(
        attempt=retry_state.attempt_number,
        elapsed_ms=elapsed * 1000,
        last_error=classify_error(exc),
    )


def _policy_stop(retry_state: RetryCallState) -> bool:
    return isinstance(decide(policy_state(retry_state)), Fatal)


def _policy_wait(retry_state: RetryCallState) -> float:
    outcome = decide(policy_state(retry_state))
    if isinstance(outcome, WaitThenRetry):
        return outcome.delay_seconds
    return 0.0


def _raise_fatal(retry_state: RetryCallState) -> None:
    """Raise the fatal error matching the policy's final decision."""
    outcome = decide(policy_state(retry_state))
    last_error = retry_state.outcome.exception() if retry_state.outcome else None
    if not isinstance(outcome, Fatal):
        # _policy_stop only fires on Fatal
        raise last_error or RedisConnectionError("connection failed")
    logger.error(
        "Giving up on Redis connection after %d attempt(s): %s",
        retry_state.attempt_number,
        outcome.reason,
    )
    raise outcome.to_exception() from last_error


@retry(
    retry=retry_if_exception_type(RETRYABLE_ERRORS)
    & retry_if_not_exception_type(AuthenticationError),
    stop=_policy_stop,
    wait=_policy_wait,
    retry_error_callback=_raise_fatal,
)
async def open_connection(client: Redis) -> None:
    """Establish the connection to the server with retry.

    Issues a PING, which makes the client library open a connection.
    Failed attempts are retried until the reconnect policy declares the
    sequence fatal.

    Args:
        client: The redis.asyncio client to connect.

    Raises:
        FatalConnectionError: If the reconnect policy gives up.
        AuthenticationError: If the server rejects the credentials.
    """
    logger.debug("Connecting to Redis server")
    try:
        await client.ping()
    except RETRYABLE_ERRORS as e:
        logger.warning("Redis connection attempt failed: %s", e)
        raise
    logger.info("Connected to Redis server")
