"""Fivetran Client - resilient, cached, prefetching access to the Fivetran REST API."""

from .api import RestApiManager, build_http_client
from .config import API_BASE_URL, PAGE_SIZE, ClientOptions
from .core import ClientError, DecodeError, HTTPStatusError, RateLimitExceededError
from .models import (
    Column,
    Connector,
    ConnectorStatus,
    DataSchemas,
    Group,
    NonPaginatedRoot,
    PageData,
    PaginatedRoot,
    Schema,
    Table,
)
from .runtime import (
    HTTPClient,
    NonPaginatedFetcher,
    PageIterator,
    PaginatedFetcher,
    RequestHandler,
    Response,
    TTLCache,
)

__version__ = "0.1.0"

__all__ = [
    "RestApiManager",
    "build_http_client",
    "ClientOptions",
    "API_BASE_URL",
    "PAGE_SIZE",
    "ClientError",
    "HTTPStatusError",
    "RateLimitExceededError",
    "DecodeError",
    "NonPaginatedRoot",
    "PageData",
    "PaginatedRoot",
    "Group",
    "Connector",
    "ConnectorStatus",
    "DataSchemas",
    "Schema",
    "Table",
    "Column",
    "HTTPClient",
    "RequestHandler",
    "Response",
    "TTLCache",
    "PaginatedFetcher",
    "NonPaginatedFetcher",
    "PageIterator",
]
