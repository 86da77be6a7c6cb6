"""Response envelopes shared by every endpoint.

The API wraps payloads in one of two shapes::

    {"data": <T>}
    {"data": {"items": [<T>, ...], "next_cursor": "<cursor>" | null}}
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for API payloads.

    Property names are matched case-insensitively onto snake_case fields and
    unknown properties are ignored.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _lower_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k.lower() if isinstance(k, str) else k: v for k, v in data.items()}
        return data


class NonPaginatedRoot(ApiModel, Generic[T]):
    """Single-object envelope."""

    data: T | None = None


class PageData(ApiModel, Generic[T]):
    """One page of a cursor-paginated collection."""

    items: list[T] = Field(default_factory=list)
    next_cursor: str | None = None

    @property
    def has_next(self) -> bool:
        """Missing or blank cursor means no more pages."""
        return bool(self.next_cursor and self.next_cursor.strip())


class PaginatedRoot(ApiModel, Generic[T]):
    """Paginated envelope."""

    data: PageData[T] | None = None

    @property
    def items(self) -> list[T]:
        return self.data.items if self.data else []

    @property
    def next_cursor(self) -> str | None:
        if self.data is None or not self.data.has_next:
            return None
        return self.data.next_cursor
