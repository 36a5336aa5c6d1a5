#!/usr/bin/env python3
"""Constants for the reconnect policy.

These constants bound how long and how often the connection driver keeps
retrying before the store is declared unreachable. All durations are in
milliseconds.
"""

# Total retry time after which reconnecting is abandoned (one hour).
MAX_RETRY_TIME_MS: int = 1000 * 60 * 60

# Failed attempts allowed before reconnecting is abandoned.
MAX_ATTEMPTS: int = 10

# Linear backoff step: delay = attempt * BACKOFF_STEP_MS.
BACKOFF_STEP_MS: int = 100

# Upper bound on the delay between attempts.
MAX_BACKOFF_MS: int = 3000
