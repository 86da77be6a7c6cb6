"""Envelope decoding shared by the fetchers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from ...core.exceptions import DecodeError
from ..rest.request_handler import RequestHandler

E = TypeVar("E")


@lru_cache(maxsize=128)
def _adapter(envelope_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(envelope_type)


def type_name(item_type: Any) -> str:
    """Short display name for a target type, e.g. ``Group`` or ``str``."""
    return getattr(item_type, "__name__", None) or repr(item_type)


class BaseFetcher:
    """Holds the request handler and decodes response bodies into envelopes."""

    def __init__(self, request_handler: RequestHandler) -> None:
        self.request_handler = request_handler

    @staticmethod
    def decode(body: str, envelope_type: type[E], *, endpoint: str, target: str) -> E:
        """Validate ``body`` as JSON into ``envelope_type``.

        Raises:
            DecodeError: Malformed JSON or a body not matching the envelope,
                with the pydantic error chained as the cause
        """
        try:
            return _adapter(envelope_type).validate_json(body)
        except ValidationError as e:
            raise DecodeError(endpoint=endpoint, target=target, body=body) from e
