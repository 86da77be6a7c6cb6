"""Rate-limit, retry and cache aware GET dispatcher.

Architecture:
    RequestHandler sits between the fetchers and the transport. For every
    logical GET it:
    - serves a fresh cached body without touching the network
    - bounds transport calls in flight with a ConcurrencyGate
    - waits for the shared RetryDeadline before each transport call
    - retries 429 responses up to ``max_retries`` times, honoring Retry-After
    - caches successful bodies only

Design Decisions:
    - The gate is held only around the transport call; backoff sleeps happen
      outside it.
    - The deadline is shared by every call through one handler: a 429 on one
      URL delays requests to all URLs.
    - The cache is keyed by the exact request URL, query string included, so
      each page of a collection is cached on its own.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from ...config import DEFAULT_RETRY_AFTER, MAX_429_RETRIES
from ...core.exceptions import HTTPStatusError, RateLimitExceededError
from ..telemetry import (
    log_cache_hit,
    log_rate_limit_exhausted,
    log_rate_limited,
    log_request_started,
)
from .http_client import Response, Transport
from .throttle import ConcurrencyGate, RetryDeadline, make_gate
from .ttl_cache import TTLCache

TOO_MANY_REQUESTS = 429


class RequestHandler:
    """Resilient GET over a transport.

    Set ``max_concurrent_requests`` to 0 to disable the concurrency limit and
    ``cache_ttl`` to None to disable caching.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        max_concurrent_requests: int = 0,
        cache_ttl: float | None = 30.0,
        max_retries: int = MAX_429_RETRIES,
        default_retry_after: float = DEFAULT_RETRY_AFTER,
        cache: TTLCache[str, str] | None = None,
        deadline: RetryDeadline | None = None,
        gate: ConcurrencyGate | None = None,
    ) -> None:
        """Initialize request handler.

        Args:
            transport: Transport issuing the actual GET requests
            max_concurrent_requests: Maximum transport calls in flight (0 = unbounded)
            cache_ttl: Seconds a successful body is reused (None disables caching)
            max_retries: Retries allowed after a 429 before giving up
            default_retry_after: Backoff in seconds when a 429 has no Retry-After
            cache: Optional cache instance (defaults to a new TTLCache)
            deadline: Optional shared deadline (defaults to a new RetryDeadline)
            gate: Optional gate, overrides ``max_concurrent_requests``
        """
        if cache_ttl is not None and cache_ttl <= 0:
            raise ValueError("cache_ttl must be positive or None")
        self._transport = transport
        self._cache_ttl = cache_ttl
        self._max_retries = max_retries
        self._default_retry_after = default_retry_after
        self._cache: TTLCache[str, str] = cache if cache is not None else TTLCache()
        self._deadline = deadline or RetryDeadline()
        self._gate = gate or make_gate(max_concurrent_requests)

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def cache(self) -> TTLCache[str, str]:
        return self._cache

    @property
    def deadline(self) -> RetryDeadline:
        return self._deadline

    @property
    def gate(self) -> ConcurrencyGate:
        return self._gate

    async def get(self, url: str) -> Response:
        """Issue a GET for ``url``, retrying on 429.

        Raises:
            RateLimitExceededError: 429 returned on the last allowed attempt
            HTTPStatusError: Any other non-success status
            asyncio.CancelledError: The calling task was cancelled
        """
        attempt = 0
        while True:
            cached = self._cached(url)
            if cached is not None:
                return cached

            async with self._gate:
                await self._deadline.wait()
                log_request_started(url=url, attempt=attempt)
                response = await self._transport.get(url)

            if response.status == TOO_MANY_REQUESTS:
                retry_after = parse_retry_after(response.headers, self._default_retry_after)
                self._deadline.push(retry_after)
                if attempt >= self._max_retries:
                    log_rate_limit_exhausted(url=url, max_retries=self._max_retries)
                    raise RateLimitExceededError(url, self._max_retries, retry_after)
                log_rate_limited(url=url, attempt=attempt, retry_after=retry_after)
                await asyncio.sleep(retry_after)
                attempt += 1
                continue

            if not response.ok:
                raise HTTPStatusError.from_response(url, response.status, response.text)

            if self._cache_ttl is not None:
                body = self._cache.get_or_add(url, lambda: response.text, self._cache_ttl)
                if body is not response.text:
                    return Response(url=url, status=response.status, text=body)
            return response

    def _cached(self, url: str) -> Response | None:
        if self._cache_ttl is None:
            return None
        body, found = self._cache.try_get(url)
        if not found or body is None:
            return None
        log_cache_hit(url=url)
        return Response(url=url, status=200, text=body)

    async def close(self) -> None:
        await self._transport.close()


def parse_retry_after(headers: Mapping[str, str], default: float) -> float:
    """Read Retry-After as delta seconds or an HTTP date.

    Missing or unparseable values fall back to ``default``.
    """
    value = None
    for key, header in headers.items():
        if key.lower() == "retry-after":
            value = header.strip()
            break
    if not value:
        return default

    try:
        seconds = float(value)
    except ValueError:
        pass
    else:
        return max(seconds, 0.0) if math.isfinite(seconds) else default

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return default
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)
