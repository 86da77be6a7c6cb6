"""Client options and shared Fivetran API constants.

This module centralizes the base URL, paging and retry constants used by the
request handler and the fetchers so they can stay small and focused.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

API_BASE_URL = "https://api.fivetran.com/v1/"

# Fixed page size sent as the ``limit`` query parameter
PAGE_SIZE = 100

# 3 retries means up to 4 attempts per logical GET
MAX_429_RETRIES = 3
DEFAULT_RETRY_AFTER = 60.0

# Upper bound for body previews carried by error messages
PREVIEW_LIMIT = 200

DEFAULT_USER_AGENT = "fivetran-client/1.0"


class ClientOptions(BaseModel):
    """Options for building a client.

    Attributes:
        timeout: Per-request transport timeout in seconds
        max_concurrent_requests: Maximum transport calls in flight (0 = unbounded)
        user_agent: User-Agent header sent on every request
        cache_ttl: Seconds a successful payload is reused (None disables caching)
    """

    timeout: float = Field(40.0, gt=0)
    max_concurrent_requests: int = Field(0, ge=0)
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1)
    cache_ttl: float | None = Field(30.0, gt=0)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
