"""Fivetran entity payloads returned by the facade endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .envelopes import ApiModel


class Group(ApiModel):
    """Destination group."""

    id: str = Field(..., min_length=1)
    name: str | None = None
    created_at: datetime | None = None


class ConnectorStatus(ApiModel):
    """Sync and setup state of a connector."""

    setup_state: str | None = None
    sync_state: str | None = None
    update_state: str | None = None
    is_historical_sync: bool | None = None


class Connector(ApiModel):
    """Connector belonging to a group."""

    id: str = Field(..., min_length=1)
    group_id: str | None = None
    service: str | None = None
    service_version: int | None = None
    # "schema" shadows a BaseModel attribute
    schema_name: str | None = Field(None, alias="schema")
    paused: bool | None = None
    sync_frequency: int | None = None
    created_at: datetime | None = None
    succeeded_at: datetime | None = None
    failed_at: datetime | None = None
    status: ConnectorStatus | None = None


class Column(ApiModel):
    name_in_destination: str | None = None
    enabled: bool | None = None
    hashed: bool | None = None


class Table(ApiModel):
    name_in_destination: str | None = None
    enabled: bool | None = None
    sync_mode: str | None = None
    columns: dict[str, Column] = Field(default_factory=dict)


class Schema(ApiModel):
    name_in_destination: str | None = None
    enabled: bool | None = None
    tables: dict[str, Table] = Field(default_factory=dict)


class DataSchemas(ApiModel):
    """Schema configuration of a connector, keyed by source schema name."""

    enable_new_by_default: bool | None = None
    schema_change_handling: str | None = None
    schemas: dict[str, Schema] = Field(default_factory=dict)
