"""Shared fixtures: stub transports and a controllable clock."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable

import pytest

from fivetran.client.runtime.rest import Response

Handler = Callable[[str], Response | Awaitable[Response]]


class StubTransport:
    """Transport returning canned responses and recording every call."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def get(self, url: str) -> Response:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            result = self._handler(url)
            if inspect.isawaitable(result):
                result = await result
            return result
        finally:
            self.in_flight -= 1

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def stub_transport() -> Callable[[Handler], StubTransport]:
    """Factory building a StubTransport around a handler function."""
    return StubTransport


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ok() -> Callable[..., Response]:
    """Factory for 200 responses."""

    def build(text: str, url: str = "") -> Response:
        return Response(url=url, status=200, text=text)

    return build


@pytest.fixture
def too_many() -> Callable[..., Response]:
    """Factory for 429 responses with an optional Retry-After header."""

    def build(retry_after: str | None = None, url: str = "") -> Response:
        headers = {"Retry-After": retry_after} if retry_after is not None else {}
        return Response(url=url, status=429, text="", headers=headers)

    return build
