# n8n_client/utils/api/retry.py

import asyncio
import errno
from dataclasses import dataclass, replace
from typing import FrozenSet, Iterator, Optional, Tuple

import aiohttp

from ...core.exceptions import APIError, TransportError

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 0.1  # seconds
DEFAULT_MAX_DELAY = 5.0  # seconds

RETRYABLE_STATUSES: FrozenSet[int] = frozenset({429, 500, 502, 503, 504})

TRANSIENT_ERRNOS: FrozenSet[int] = frozenset({
    errno.ECONNREFUSED,
    errno.ECONNRESET,
    errno.ENETUNREACH,
    errno.ETIMEDOUT,
})

TRANSIENT_MESSAGES: Tuple[str, ...] = (
    "timeout",
    "timed out",
    "connection refused",
    "connection reset",
    "network is unreachable",
)

@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff settings, delays in seconds"""
    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    max_delay: float = DEFAULT_MAX_DELAY

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def with_defaults(self) -> "RetryPolicy":
        """Replace every zero or unset field with its default."""
        return replace(
            self,
            max_retries=self.max_retries if self.max_retries and self.max_retries > 0 else DEFAULT_MAX_RETRIES,
            base_delay=self.base_delay if self.base_delay and self.base_delay > 0 else DEFAULT_BASE_DELAY,
            max_delay=self.max_delay if self.max_delay and self.max_delay > 0 else DEFAULT_MAX_DELAY,
        )

    def backoff(self, attempt: int) -> float:
        """
        Delay before retrying after the given 0-based attempt.

        Doubles per attempt and clamps at max_delay. The doubling stops as
        soon as the cap is reached, so huge attempt numbers never build an
        oversized float.
        """
        cap = max(self.max_delay, 0.0)
        delay = max(self.base_delay, 0.0)
        if delay >= cap:
            return cap
        if delay == 0:
            # Doubling zero never reaches the cap
            return 0.0
        for _ in range(max(attempt, 0)):
            delay *= 2
            if delay >= cap:
                return cap
        return delay

    def delays(self) -> Iterator[Optional[float]]:
        """
        Wait generator for the backoff library.

        The first bare yield is consumed when backoff primes the generator;
        after that the n-th retry waits backoff(n).
        """
        yield None
        attempt = 0
        while True:
            yield self.backoff(attempt)
            attempt += 1

def is_retryable_status(status: int) -> bool:
    return status in RETRYABLE_STATUSES

def is_retryable_error(error: BaseException) -> bool:
    """Decide whether a transport failure looks temporary."""
    if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return True

    # aiohttp keeps the underlying socket error on os_error
    for candidate in (error, getattr(error, "os_error", None), error.__cause__):
        if isinstance(candidate, (ConnectionRefusedError, ConnectionResetError, TimeoutError)):
            return True
        if isinstance(candidate, OSError) and candidate.errno in TRANSIENT_ERRNOS:
            return True

    message = str(error).lower()
    return any(fragment in message for fragment in TRANSIENT_MESSAGES)

def should_retry(error: Exception) -> bool:
    """Whether a failed attempt may be repeated: retryable status or transient transport failure"""
    if isinstance(error, APIError):
        return is_retryable_status(error.code)
    if isinstance(error, TransportError):
        return error.__cause__ is not None and is_retryable_error(error.__cause__)
    return False
