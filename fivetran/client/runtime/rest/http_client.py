"""HTTP transport helper."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import aiohttp


@dataclass(frozen=True)
class Response:
    """Fully read HTTP response.

    The body is materialized before the connection is released, so a Response
    can be cached, retried or decoded without holding network resources.
    """

    url: str
    status: int
    text: str
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return json.loads(self.text)


class Transport(Protocol):
    """Anything able to issue a GET and return a materialized Response."""

    async def get(self, url: str) -> Response: ...

    async def close(self) -> None: ...


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 40.0,
        headers: Mapping[str, str] | None = None,
        auth: aiohttp.BasicAuth | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError("Timeout must be a positive value")
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        # Credentials travel as a default header; ClientSession(auth=...) is deprecated
        if auth is not None:
            self.headers["Authorization"] = auth.encode()
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def resolve(self, url: str) -> str:
        """Combine base_url with a relative path; absolute URLs pass through."""
        if self.base_url and not url.startswith(("http://", "https://")):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    async def get(self, url: str) -> Response:
        """GET request, reading the whole body before releasing the connection."""
        full_url = self.resolve(url)
        async with self.session.get(full_url) as response:
            text = await response.text()
            return Response(
                url=url,
                status=response.status,
                text=text,
                headers=dict(response.headers),
            )

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
