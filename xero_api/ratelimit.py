"""
Request pacing for the Xero API.

Xero rejects callers that exceed its per-minute ceiling, so every outbound
request first takes a slot from a PacingLimiter. Slots are handed out at a
fixed interval with no burst allowance.
"""
from __future__ import annotations
import threading
import time
from typing import Callable, Optional


class PacingLimiter:
    """
    Grants at most ``rate`` requests per ``per`` seconds, evenly spaced.

    Usage:
        limiter = PacingLimiter(rate=1, per=1.0)
        limiter.take()                       # block until the next slot

        cancel = threading.Event()
        if not limiter.acquire(cancel=cancel, timeout=5):
            ...                              # cancelled or slot too far away
    """

    def __init__(
        self,
        rate: int = 1,
        per: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if rate <= 0:
            raise ValueError("rate must be > 0")
        if per <= 0:
            raise ValueError("per must be > 0")
        self.interval = per / rate
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_slot: Optional[float] = None

    def acquire(
        self,
        cancel: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        """
        Wait for the next free slot.

        The slot is reserved under the lock and waited for outside it, so
        callers are served in the order they entered.

        Args:
            cancel: Event that aborts the wait when set
            timeout: Give up without reserving if the slot is further away than this

        Returns:
            True once the caller may send its request, False if cancelled or timed out
        """
        with self._lock:
            if cancel is not None and cancel.is_set():
                return False
            now = self._clock()
            slot = now if self._next_slot is None else max(now, self._next_slot)
            wait = slot - now
            if timeout is not None and wait > timeout:
                return False
            self._next_slot = slot + self.interval

        if wait <= 0:
            return True
        if cancel is None:
            self._sleep(wait)
            return True
        # A cancelled waiter still burns its reserved slot.
        return not cancel.wait(wait)

    def take(self) -> None:
        """Block until the next slot, unconditionally."""
        self.acquire()
