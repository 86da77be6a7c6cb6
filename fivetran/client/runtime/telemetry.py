"""Structured logging for request and pagination events.

Each helper emits one event whose message is the event name and whose fields
travel in ``extra``. The library installs no handlers.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_request_started(*, url: str, attempt: int) -> None:
    """Log an outbound transport call.

    Args:
        url: Request URL (relative to the base URL)
        attempt: Zero-based attempt number within the logical call
    """
    logger.debug("request_started", extra={"url": url, "attempt": attempt})


def log_cache_hit(*, url: str) -> None:
    logger.debug("cache_hit", extra={"url": url})


def log_rate_limited(*, url: str, attempt: int, retry_after: float) -> None:
    """Log a 429 that will be retried.

    Args:
        url: Request URL
        attempt: Zero-based attempt that received the 429
        retry_after: Seconds until the next attempt may be issued
    """
    logger.warning(
        "rate_limited",
        extra={"url": url, "attempt": attempt, "retry_after": retry_after},
    )


def log_rate_limit_exhausted(*, url: str, max_retries: int) -> None:
    logger.error("rate_limit_exhausted", extra={"url": url, "max_retries": max_retries})


def log_page_fetched(*, endpoint: str, page_index: int, items: int, has_next: bool) -> None:
    """Log a decoded page.

    Args:
        endpoint: Collection endpoint
        page_index: Zero-based page number in the cursor chain
        items: Number of items on the page
        has_next: Whether the page carried a next cursor
    """
    logger.debug(
        "page_fetched",
        extra={
            "endpoint": endpoint,
            "page_index": page_index,
            "items": items,
            "has_next": has_next,
        },
    )
