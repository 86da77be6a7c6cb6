"""REST runtime abstractions."""

from .http_client import HTTPClient, Response, Transport
from .request_handler import RequestHandler, parse_retry_after
from .throttle import ConcurrencyGate, RetryDeadline, UnboundedGate, make_gate
from .ttl_cache import CacheEntry, TTLCache

__all__ = [
    "HTTPClient",
    "Response",
    "Transport",
    "RequestHandler",
    "parse_retry_after",
    "ConcurrencyGate",
    "UnboundedGate",
    "RetryDeadline",
    "make_gate",
    "CacheEntry",
    "TTLCache",
]
