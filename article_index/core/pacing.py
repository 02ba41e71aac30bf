"""
Inter-batch pacing policies for embedding requests.

The embedder calls wait() between consecutive provider batches so that
requests stay within the provider's rate limits.

Dependencies: time, threading
System role: Rate-limit courtesy for the embedding provider
"""

import logging
import threading
import time
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class BatchPacer(Protocol):
    """Blocks until the next batch may be submitted."""

    def wait(self) -> None:
        """Block the caller as long as the policy requires."""
        ...


class NoPacer:
    """Submit batches back to back."""

    def wait(self) -> None:
        return None


class FixedDelayPacer:
    """Sleep a constant interval between batches."""

    def __init__(
        self,
        delay_seconds: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize fixed delay pacer.

        Args:
            delay_seconds: Pause before each subsequent batch
            sleep: Sleep function (injectable for tests)
        """
        if delay_seconds < 0:
            raise ValueError("delay_seconds cannot be negative")
        self._delay = delay_seconds
        self._sleep = sleep

    def wait(self) -> None:
        if self._delay > 0:
            self._sleep(self._delay)


class TokenBucketPacer:
    """
    Token bucket allowing short bursts up to capacity.

    Each wait() consumes one token; tokens refill continuously at
    rate_per_second. When the bucket is empty the caller sleeps until
    a token is available.
    """

    def __init__(
        self,
        rate_per_second: float,
        capacity: int = 1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize token bucket pacer.

        Args:
            rate_per_second: Token refill rate
            capacity: Maximum stored tokens (burst size)
            clock: Monotonic clock (injectable for tests)
            sleep: Sleep function (injectable for tests)
        """
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be positive")
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self._rate = rate_per_second
        self._capacity = float(capacity)
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._last = clock()
        self._lock = threading.Lock()

    def wait(self) -> None:
        with self._lock:
            self._refill()
            if self._tokens < 1:
                shortfall = (1 - self._tokens) / self._rate
                logger.debug(f"{__name__}:wait - Bucket empty, sleeping {shortfall:.3f}s")
                self._sleep(shortfall)
                self._refill()
                self._tokens = max(self._tokens, 1.0)
            self._tokens -= 1

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last)
        self._tokens = min(self._capacity, self._tokens + elapsed * self._rate)
        self._last = now


def create_pacer(
    policy: str,
    delay_seconds: float = 0.1,
    rate_per_second: float = 10.0,
    capacity: int = 1,
) -> BatchPacer:
    """
    Build a pacer from configuration values.

    Args:
        policy: 'fixed', 'token_bucket' or 'none'
        delay_seconds: Delay for the fixed policy
        rate_per_second: Refill rate for the token bucket policy
        capacity: Burst size for the token bucket policy

    Returns:
        BatchPacer: Configured pacer

    Raises:
        ValueError: If the policy name is unknown
    """
    policy = policy.lower()
    if policy == "fixed":
        return FixedDelayPacer(delay_seconds=delay_seconds)
    if policy == "token_bucket":
        return TokenBucketPacer(rate_per_second=rate_per_second, capacity=capacity)
    if policy == "none":
        return NoPacer()
    raise ValueError(
        f"Invalid pacing policy: {policy}. Must be 'fixed', 'token_bucket' or 'none'."
    )
