"""Single-object fetcher."""

from __future__ import annotations

from typing import Optional, TypeVar

from ...models.envelopes import NonPaginatedRoot
from .base import BaseFetcher, type_name

T = TypeVar("T")


class NonPaginatedFetcher(BaseFetcher):
    """Fetches an endpoint returning ``{"data": <T>}``."""

    async def fetch(self, endpoint: str, item_type: type[T]) -> T | None:
        """Fetch and decode a single object.

        Args:
            endpoint: Endpoint path relative to the API base URL
            item_type: Type of the ``data`` payload

        Returns:
            The payload, or None when the envelope is ``null`` or carries no data

        Raises:
            DecodeError: Body does not match the envelope
            HTTPStatusError: Non-success status from the request handler
        """
        response = await self.request_handler.get(endpoint)
        root = self.decode(
            response.text,
            Optional[NonPaginatedRoot[item_type]],  # type: ignore[valid-type]
            endpoint=endpoint,
            target=f"NonPaginatedRoot[{type_name(item_type)}]",
        )
        return root.data if root is not None else None
