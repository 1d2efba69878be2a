"""Tests for the pacing limiter."""
import threading

import pytest

from xero_api.ratelimit import PacingLimiter


class FakeClock:
    """Monotonic clock that only moves when the limiter sleeps."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestPacingLimiter:

    def test_first_acquire_does_not_wait(self):
        clock = FakeClock()
        limiter = PacingLimiter(rate=1, per=1.0, clock=clock, sleep=clock.sleep)
        assert limiter.acquire() is True
        assert clock.sleeps == []

    def test_back_to_back_acquires_are_spaced_one_interval_apart(self):
        clock = FakeClock()
        limiter = PacingLimiter(rate=1, per=1.0, clock=clock, sleep=clock.sleep)
        for _ in range(4):
            limiter.take()
        assert clock.sleeps == [1.0, 1.0, 1.0]
        assert clock.now == 103.0

    def test_rate_divides_period(self):
        clock = FakeClock()
        limiter = PacingLimiter(rate=4, per=1.0, clock=clock, sleep=clock.sleep)
        limiter.take()
        limiter.take()
        assert clock.sleeps == [0.25]

    def test_no_burst_after_idle(self):
        clock = FakeClock()
        limiter = PacingLimiter(rate=1, per=1.0, clock=clock, sleep=clock.sleep)
        limiter.take()
        clock.now += 10  # idle for a while
        limiter.take()
        limiter.take()
        assert clock.sleeps == [1.0]

    def test_partial_wait_after_some_time_passed(self):
        clock = FakeClock()
        limiter = PacingLimiter(rate=1, per=1.0, clock=clock, sleep=clock.sleep)
        limiter.take()
        clock.now += 0.4
        limiter.take()
        assert clock.sleeps == [pytest.approx(0.6)]

    def test_timeout_shorter_than_wait_returns_false_without_reserving(self):
        clock = FakeClock()
        limiter = PacingLimiter(rate=1, per=10.0, clock=clock, sleep=clock.sleep)
        assert limiter.acquire() is True
        assert limiter.acquire(timeout=1.0) is False
        assert clock.sleeps == []
        # The refused call did not push the next slot back
        assert limiter.acquire(timeout=10.0) is True
        assert clock.sleeps == [10.0]

    def test_cancelled_event_returns_false_immediately(self):
        clock = FakeClock()
        limiter = PacingLimiter(rate=1, per=1.0, clock=clock, sleep=clock.sleep)
        cancel = threading.Event()
        cancel.set()
        assert limiter.acquire(cancel=cancel) is False

    def test_cancel_interrupts_a_pending_wait(self):
        limiter = PacingLimiter(rate=1, per=30.0)
        cancel = threading.Event()
        assert limiter.acquire(cancel=cancel) is True

        results = []
        waiter = threading.Thread(target=lambda: results.append(limiter.acquire(cancel=cancel)))
        waiter.start()
        cancel.set()
        waiter.join(timeout=5)

        assert not waiter.is_alive()
        assert results == [False]

    def test_uncancelled_event_still_paces(self):
        limiter = PacingLimiter(rate=1, per=0.05)
        cancel = threading.Event()
        assert limiter.acquire(cancel=cancel) is True
        assert limiter.acquire(cancel=cancel) is True

    def test_concurrent_callers_get_distinct_slots(self):
        clock = FakeClock()
        lock = threading.Lock()

        def sleep(seconds):
            with lock:
                clock.sleeps.append(seconds)

        limiter = PacingLimiter(rate=1, per=1.0, clock=clock, sleep=sleep)
        threads = [threading.Thread(target=limiter.take) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # Clock never moves, so each caller waits one interval longer than the last
        assert sorted(clock.sleeps) == [1.0, 2.0, 3.0, 4.0]

    @pytest.mark.parametrize("rate,per", [(0, 1.0), (1, 0), (-1, 1.0)])
    def test_invalid_configuration(self, rate, per):
        with pytest.raises(ValueError):
            PacingLimiter(rate=rate, per=per)
