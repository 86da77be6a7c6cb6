"""RestApiManager facade over the fetch engine.

The RestApiManager maps named Fivetran resources onto the generic
paginated and single-object fetchers and owns client construction.

Architecture:
    - build_http_client(): HTTPClient with Basic auth, Accept and User-Agent
      headers and the configured timeout
    - RestApiManager: one RequestHandler shared by both fetchers, so every
      resource call shares the cache, concurrency gate and retry deadline

Design Decisions:
    - Handler injection via ``request_handler=`` for testing with stub transports
    - The manager closes the transport only when it created it
"""

from __future__ import annotations

import logging
from urllib.parse import quote_plus

import aiohttp

from ..config import API_BASE_URL, ClientOptions
from ..models import Connector, DataSchemas, Group
from ..runtime.fetchers import NonPaginatedFetcher, PageIterator, PaginatedFetcher
from ..runtime.rest import HTTPClient, RequestHandler

logger = logging.getLogger(__name__)


def build_http_client(
    base_url: str,
    api_key: str,
    api_secret: str,
    options: ClientOptions,
) -> HTTPClient:
    """Create the transport with authentication and default headers."""
    return HTTPClient(
        base_url=base_url,
        timeout=options.timeout,
        headers={
            "Accept": "application/json",
            "User-Agent": options.user_agent,
        },
        auth=aiohttp.BasicAuth(api_key, api_secret),
    )


class RestApiManager:
    """Entry point for reading groups, connectors and connector schemas.

    Example:
        >>> async with RestApiManager("key", "secret") as api:
        ...     async with api.get_groups() as groups:
        ...         async for group in groups:
        ...             print(group.name)
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        options: ClientOptions | None = None,
        *,
        base_url: str = API_BASE_URL,
        request_handler: RequestHandler | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            api_key: Fivetran API key
            api_secret: Fivetran API secret
            options: Client options (defaults to ClientOptions())
            base_url: API base URL
            request_handler: Optional RequestHandler (creates one over a new
                HTTPClient if not provided)

        Note:
            Handler injection allows testing with stub transports. An injected
            handler stays owned by the caller and is not closed by ``close()``.

        Raises:
            ValueError: Neither a request handler nor both credentials given
        """
        self._owns_transport = request_handler is None
        if request_handler is None:
            if not api_key or not api_secret:
                raise ValueError("api_key and api_secret are required without a request_handler")
            options = options or ClientOptions()
            request_handler = RequestHandler(
                build_http_client(base_url, api_key, api_secret, options),
                max_concurrent_requests=options.max_concurrent_requests,
                cache_ttl=options.cache_ttl,
            )
        self._handler = request_handler
        self._paginated = PaginatedFetcher(request_handler)
        self._non_paginated = NonPaginatedFetcher(request_handler)
        self._closed = False

    @property
    def request_handler(self) -> RequestHandler:
        return self._handler

    def get_groups(self) -> PageIterator[Group]:
        """Iterate over all groups."""
        return self._paginated.fetch_items("groups", Group)

    def get_connectors(self, group_id: str) -> PageIterator[Connector]:
        """Iterate over all connectors of a group."""
        endpoint = f"groups/{quote_plus(group_id)}/connectors"
        return self._paginated.fetch_items(endpoint, Connector)

    async def get_connector_schemas(self, connector_id: str) -> DataSchemas | None:
        """Fetch the schema configuration of a connector."""
        endpoint = f"connectors/{quote_plus(connector_id)}/schemas"
        return await self._non_paginated.fetch(endpoint, DataSchemas)

    async def close(self) -> None:
        """Close the transport if this manager created it."""
        if self._closed:
            return
        self._closed = True
        if self._owns_transport:
            logger.debug("Closing RestApiManager transport")
            await self._handler.close()

    async def __aenter__(self) -> RestApiManager:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
