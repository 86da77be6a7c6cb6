"""Shared throttling state for one request handler.

Architecture:
    Two small synchronized objects are injected into each RequestHandler:
    - RetryDeadline: "do not issue a request before this instant", set on 429
    - ConcurrencyGate: permit pool bounding transport calls in flight

    Both are scoped to a handler instance, so independent clients never
    throttle each other.
"""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Callable
from types import TracebackType


class RetryDeadline:
    """Mutex-guarded earliest instant at which a new request may be issued.

    The lock covers only reads and updates of the timestamp, never the wait.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._not_before = clock()

    def remaining(self) -> float:
        """Seconds left until the deadline, 0.0 once it has passed."""
        with self._lock:
            delay = self._not_before - self._clock()
        return max(delay, 0.0)

    def push(self, seconds: float) -> None:
        """Move the deadline to ``now + seconds``."""
        with self._lock:
            self._not_before = self._clock() + seconds

    async def wait(self) -> None:
        """Suspend until the deadline has passed."""
        delay = self.remaining()
        if delay > 0:
            await asyncio.sleep(delay)


class ConcurrencyGate:
    """Counting permit pool for transport calls.

    Usage:
        async with gate:
            response = await transport.get(url)
    """

    def __init__(self, limit: int) -> None:
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Permits currently held."""
        return self._in_flight

    async def __aenter__(self) -> ConcurrencyGate:
        await self._semaphore.acquire()
        self._in_flight += 1
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._in_flight -= 1
        self._semaphore.release()


class UnboundedGate(ConcurrencyGate):
    """Gate that never blocks, used when no concurrency limit is configured."""

    def __init__(self) -> None:
        self.limit = 0
        self._in_flight = 0

    async def __aenter__(self) -> UnboundedGate:
        self._in_flight += 1
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._in_flight -= 1


def make_gate(max_concurrent_requests: int) -> ConcurrencyGate:
    """Build a bounded gate, or an unbounded one for 0."""
    if max_concurrent_requests > 0:
        return ConcurrencyGate(max_concurrent_requests)
    return UnboundedGate()
