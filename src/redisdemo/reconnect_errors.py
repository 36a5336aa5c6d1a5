#!/usr/bin/env python3
"""Terminal connection failures raised when the reconnect policy gives up."""


class FatalConnectionError(ConnectionError):
    """
    Base class for connection failures that must not be retried.

    Subclasses ConnectionError so callers that already handle transport
    failures also catch an abandoned reconnect sequence.
    """

    pass


class ConnectionRefused(FatalConnectionError):
    """The server actively refused the connection."""

    pass


class RetryTimeExhausted(FatalConnectionError):
    """Cumulative retry time exceeded the allowed maximum."""

    pass


class MaxAttemptsReached(FatalConnectionError):
    """Too many failed connection attempts."""

    pass
