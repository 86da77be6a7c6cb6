"""Data models for API envelopes and entities.

All models are Pydantic models that ignore unknown properties and match
property names case-insensitively.

See Also:
    - Pydantic documentation: https://docs.pydantic.dev/
"""

from .entities import Column, Connector, ConnectorStatus, DataSchemas, Group, Schema, Table
from .envelopes import ApiModel, NonPaginatedRoot, PageData, PaginatedRoot

__all__ = [
    "ApiModel",
    "NonPaginatedRoot",
    "PageData",
    "PaginatedRoot",
    "Group",
    "Connector",
    "ConnectorStatus",
    "DataSchemas",
    "Schema",
    "Table",
    "Column",
]
