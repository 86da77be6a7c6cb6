"""Core components."""

from .exceptions import (
    ClientError,
    DecodeError,
    HTTPStatusError,
    RateLimitExceededError,
    preview,
)

__all__ = [
    "ClientError",
    "HTTPStatusError",
    "RateLimitExceededError",
    "DecodeError",
    "preview",
]
