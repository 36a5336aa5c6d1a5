#!/usr/bin/env python3
"""
Reconnect decision policy.

Given the history of a connection sequence, decide whether to give up or
how long to wait before the next attempt. The policy is a pure function:
the connection driver owns the state, does the sleeping, and turns a fatal
outcome into an exception for its caller.

Rules are evaluated in order, first match wins:
- last error was a refused connection: fatal
- cumulative retry time above MAX_RETRY_TIME_MS: fatal
- attempt count above MAX_ATTEMPTS: fatal
- otherwise wait min(attempt * BACKOFF_STEP_MS, MAX_BACKOFF_MS)
"""
from __future__ import annotations

import enum
from dataclasses import dataclass

from redisdemo.reconnect_constants import (
    BACKOFF_STEP_MS,
    MAX_ATTEMPTS,
    MAX_BACKOFF_MS,
    MAX_RETRY_TIME_MS,
)
from redisdemo.reconnect_errors import (
    ConnectionRefused,
    FatalConnectionError,
    MaxAttemptsReached,
    RetryTimeExhausted,
)


class ErrorKind(enum.Enum):
    """Classification of the last error seen by the connection driver."""

    NONE = "none"
    CONNECTION_REFUSED = "connection-refused"
    TRANSPORT_ERROR = "other-transport-error"


@dataclass(frozen=True)
class RetryState:
    """
    Accumulated history of a connection sequence.

    Attributes:
        attempt: Failed attempts so far, incremented once per failure.
        elapsed_ms: Cumulative time spent retrying, in milliseconds.
        last_error: Kind of the most recent error.
    """

    attempt: int = 0
    elapsed_ms: float = 0
    last_error: ErrorKind = ErrorKind.NONE


@dataclass(frozen=True)
class Fatal:
    """Stop retrying permanently."""

    reason: str
    error_type: type[FatalConnectionError] = FatalConnectionError

    def to_exception(self) -> FatalConnectionError:
        return self.error_type(self.reason)


@dataclass(frozen=True)
class WaitThenRetry:
    """Pause for delay_ms milliseconds, then attempt again."""

    delay_ms: int

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


Outcome = Fatal | WaitThenRetry


def decide(state: RetryState) -> Outcome:
    """
    Decide what the connection driver should do after a failed attempt.

    Args:
        state: History of the current connection sequence.

    Returns:
        Fatal when retrying must stop, WaitThenRetry with the delay otherwise.
    """
    if state.last_error is ErrorKind.CONNECTION_REFUSED:
        return Fatal("server refused connection", ConnectionRefused)
    if state.elapsed_ms > MAX_RETRY_TIME_MS:
        return Fatal("retry time exhausted", RetryTimeExhausted)
    if state.attempt > MAX_ATTEMPTS:
        return Fatal("max retry attempts reached", MaxAttemptsReached)
    return WaitThenRetry(min(state.attempt * BACKOFF_STEP_MS, MAX_BACKOFF_MS))
