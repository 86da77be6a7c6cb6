"""High-level API facade."""

from .rest_api_manager import RestApiManager, build_http_client

__all__ = ["RestApiManager", "build_http_client"]
