"""
Storefront Backend — Fixed-Window Rate Limiter
================================================

What:  Process-wide request counter consulted by the gate's rate-limit stage.
Why:   Caps how many protected requests the service admits per minute.
How:   One RateWindow (start time + count) guarded by one asyncio.Lock.
Who:   Owned by the application (app.state.rate_limiter), shared by every
       in-flight request through the gate.

Algorithm: Fixed Window with lazy reset
    1. On each check, if more than `window` seconds have elapsed since the
       window started, start a new window now with count = 0
    2. If count >= limit, reject (count unchanged)
    3. Otherwise increment count and admit

    The reset happens on the first check after expiry, not on a timer.
    A check landing exactly `window` seconds after the start still belongs
    to the old window (elapsed > window, not >=).

Concurrency:
    The lock is held for exactly one check_and_increment call: expiry test,
    reset, limit test and increment run as one unit. It is never held
    across the handler. Which of two concurrent requests is serialized first
    is unspecified; only mutual exclusion is guaranteed.

Scope:
    Single process only. Counters are not persisted or shared between
    workers or instances.
"""

import asyncio
import math
import time
from typing import Callable

# Clock returning seconds; monotonic so wall-clock adjustments can't stretch
# or shrink a window
Clock = Callable[[], float]


class RateWindow:
    """
    Counter state for the current fixed window.

    Not thread- or task-safe on its own; RateLimiter serializes access.
    Attributes are read-only from outside; the only mutator is
    check_and_increment().
    """

    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._window_start = clock()
        self._count = 0

    @property
    def window_start(self) -> float:
        return self._window_start

    @property
    def count(self) -> int:
        return self._count

    def check_and_increment(self, limit: int, window_seconds: float) -> bool:
        """
        Admit one request if the current window has room.

        Args:
            limit: Maximum admissions per window (0 rejects everything)
            window_seconds: Window length in seconds

        Returns:
            True if admitted (count incremented), False otherwise.
        """
        now = self._clock()
        if now - self._window_start > window_seconds:
            self._window_start = now
            self._count = 0

        if self._count >= limit:
            return False

        self._count += 1
        return True

    def seconds_until_reset(self, window_seconds: float) -> float:
        """Seconds left before the next check would open a fresh window."""
        elapsed = self._clock() - self._window_start
        return max(0.0, window_seconds - elapsed)


class RateLimiter:
    """
    Lock-guarded owner of the process-wide RateWindow.

    Usage:
        limiter = RateLimiter()
        if not await limiter.check_and_increment(limit=60, window_seconds=60):
            ...  # reject with 403

    Thread Safety:
        Safe for any number of concurrent tasks on one event loop (uvicorn).
        Create one limiter per application instance.
    """

    def __init__(self, clock: Clock = time.monotonic):
        self._window = RateWindow(clock=clock)
        self._lock = asyncio.Lock()

    @property
    def count(self) -> int:
        """Admissions in the current window (snapshot, unlocked read)."""
        return self._window.count

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    async def check_and_increment(self, limit: int, window_seconds: float) -> bool:
        """Atomic check-then-increment; may suspend while another task holds the lock."""
        async with self._lock:
            return self._window.check_and_increment(limit, window_seconds)

    async def retry_after(self, window_seconds: float) -> int:
        """Whole seconds (at least 1) until the current window resets."""
        async with self._lock:
            remaining = self._window.seconds_until_reset(window_seconds)
        return max(1, math.ceil(remaining))
