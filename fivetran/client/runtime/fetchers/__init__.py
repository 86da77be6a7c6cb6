"""Fetchers decoding API envelopes on top of the request handler."""

from .base import BaseFetcher
from .non_paginated import NonPaginatedFetcher
from .paginated import PageIterator, PaginatedFetcher, page_url

__all__ = [
    "BaseFetcher",
    "NonPaginatedFetcher",
    "PaginatedFetcher",
    "PageIterator",
    "page_url",
]
