"""Custom exception hierarchy."""

from __future__ import annotations

from ..config import PREVIEW_LIMIT


def preview(text: str, limit: int = PREVIEW_LIMIT) -> str:
    """Return at most ``limit`` characters of ``text``, marking truncation."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class ClientError(Exception):
    """Base exception for all library errors."""

    pass


class HTTPStatusError(ClientError):
    """Non-success HTTP status returned by the API."""

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: int,
        preview: str = "",
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.preview = preview

    @classmethod
    def from_response(cls, url: str, status_code: int, body: str) -> HTTPStatusError:
        snippet = preview(body)
        return cls(
            f"GET '{url}' failed with HTTP {status_code}. PayloadPreview=\"{snippet}\"",
            url=url,
            status_code=status_code,
            preview=snippet,
        )


class RateLimitExceededError(HTTPStatusError):
    """429 still returned after the retry budget was spent."""

    def __init__(self, url: str, max_retries: int, retry_after: float | None = None) -> None:
        super().__init__(
            f"Too Many Requests (429) for '{url}'. Retry limit ({max_retries}) exceeded.",
            url=url,
            status_code=429,
        )
        self.max_retries = max_retries
        self.retry_after = retry_after


class DecodeError(ClientError):
    """Response body does not match the expected envelope.

    The underlying parser error is chained as ``__cause__``. Only a bounded
    preview of the body is kept.
    """

    def __init__(self, *, endpoint: str, target: str, body: str) -> None:
        self.endpoint = endpoint
        self.target = target
        self.preview = preview(body)
        super().__init__(
            f"Failed to deserialize response. Endpoint='{endpoint}', "
            f"Target='{target}', PayloadPreview=\"{self.preview}\""
        )
