"""
Storefront Backend — Rate Limiter Unit Tests
===============================================

What:  Tests for RateWindow (fixed-window counter) and RateLimiter (locked owner).
How:   A manual clock drives time; no sleeping.

What we test:
    ✅ Exactly `limit` admissions per window, then rejection
    ✅ Rejections never increment the count
    ✅ limit == 0 rejects everything
    ✅ Window resets only when elapsed strictly exceeds the window
    ✅ Concurrent callers never over-admit
    ✅ Callers block while another holds the lock
    ✅ Lock is released after each call
    ✅ retry_after reports whole seconds, at least 1
"""

import asyncio

import pytest

from storefront.middleware.rate_limit import RateLimiter, RateWindow


class ManualClock:
    """Callable clock advanced explicitly by the test."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestRateWindow:

    def setup_method(self):
        self.clock = ManualClock()
        self.window = RateWindow(clock=self.clock)

    def test_fresh_window_starts_empty(self):
        assert self.window.count == 0
        assert self.window.window_start == 1000.0

    def test_admits_up_to_limit_then_rejects(self):
        results = [self.window.check_and_increment(3, 60) for _ in range(5)]

        assert results == [True, True, True, False, False]
        assert self.window.count == 3

    def test_rejection_does_not_increment(self):
        self.window.check_and_increment(1, 60)
        for _ in range(10):
            assert self.window.check_and_increment(1, 60) is False
        assert self.window.count == 1

    def test_zero_limit_rejects_everything(self):
        assert self.window.check_and_increment(0, 60) is False
        assert self.window.count == 0

    def test_elapsed_equal_to_window_keeps_old_window(self):
        """At exactly `window_seconds` elapsed the old window still applies."""
        assert self.window.check_and_increment(1, 60) is True
        self.clock.advance(60)

        assert self.window.check_and_increment(1, 60) is False
        assert self.window.window_start == 1000.0

    def test_window_resets_after_elapsed(self):
        assert self.window.check_and_increment(1, 60) is True
        self.clock.advance(60.001)

        assert self.window.check_and_increment(1, 60) is True
        assert self.window.count == 1
        assert self.window.window_start == pytest.approx(1060.001)

    def test_reset_happens_even_when_rejecting(self):
        """A reset check with limit 0 still opens a new (empty) window."""
        self.window.check_and_increment(2, 60)
        self.clock.advance(61)

        assert self.window.check_and_increment(0, 60) is False
        assert self.window.count == 0
        assert self.window.window_start == 1061.0

    def test_seconds_until_reset(self):
        self.clock.advance(45)
        assert self.window.seconds_until_reset(60) == pytest.approx(15)

        self.clock.advance(100)
        assert self.window.seconds_until_reset(60) == 0.0


class TestRateLimiter:

    @pytest.mark.asyncio
    async def test_sequential_admission(self):
        limiter = RateLimiter(clock=ManualClock())

        results = [await limiter.check_and_increment(2, 60) for _ in range(3)]

        assert results == [True, True, False]
        assert limiter.count == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_admit_exactly_limit(self):
        limiter = RateLimiter(clock=ManualClock())

        results = await asyncio.gather(
            *(limiter.check_and_increment(10, 60) for _ in range(100))
        )

        assert results.count(True) == 10
        assert results.count(False) == 90
        assert limiter.count == 10

    @pytest.mark.asyncio
    async def test_callers_wait_while_lock_is_held(self):
        """No caller reads or bumps the window while another holds the lock."""
        limiter = RateLimiter(clock=ManualClock())

        async with limiter._lock:
            waiting = [
                asyncio.ensure_future(limiter.check_and_increment(2, 60)) for _ in range(5)
            ]
            for _ in range(5):
                await asyncio.sleep(0)

            assert not any(task.done() for task in waiting)
            assert limiter.count == 0

        results = await asyncio.gather(*waiting)

        assert results.count(True) == 2
        assert limiter.count == 2
        assert limiter.locked is False

    @pytest.mark.asyncio
    async def test_lock_released_after_call(self):
        limiter = RateLimiter(clock=ManualClock())

        await limiter.check_and_increment(1, 60)
        assert limiter.locked is False

        await limiter.check_and_increment(1, 60)
        assert limiter.locked is False

    @pytest.mark.asyncio
    async def test_new_window_after_expiry(self):
        clock = ManualClock()
        limiter = RateLimiter(clock=clock)
        assert await limiter.check_and_increment(1, 60) is True
        assert await limiter.check_and_increment(1, 60) is False

        clock.advance(61)

        assert await limiter.check_and_increment(1, 60) is True

    @pytest.mark.asyncio
    async def test_retry_after_rounds_up(self):
        clock = ManualClock()
        limiter = RateLimiter(clock=clock)
        clock.advance(10.2)

        assert await limiter.retry_after(60) == 50

    @pytest.mark.asyncio
    async def test_retry_after_never_below_one(self):
        clock = ManualClock()
        limiter = RateLimiter(clock=clock)
        clock.advance(60)

        assert await limiter.retry_after(60) == 1
