"""Runtime layer: request dispatching and page fetching."""

from .fetchers import NonPaginatedFetcher, PageIterator, PaginatedFetcher
from .rest import HTTPClient, RequestHandler, Response, TTLCache

__all__ = [
    "HTTPClient",
    "RequestHandler",
    "Response",
    "TTLCache",
    "PaginatedFetcher",
    "NonPaginatedFetcher",
    "PageIterator",
]
