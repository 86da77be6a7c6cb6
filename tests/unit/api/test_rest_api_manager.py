"""Unit tests for the RestApiManager facade."""

from __future__ import annotations

import pytest

from fivetran.client import ClientOptions, RestApiManager, build_http_client
from fivetran.client.config import API_BASE_URL
from fivetran.client.models import Connector, DataSchemas, Group
from fivetran.client.runtime.rest import HTTPClient, RequestHandler, Response


class TestBuildHttpClient:
    def test_headers_auth_and_timeout(self):
        options = ClientOptions(timeout=12.5, user_agent="agent/2.0")
        client = build_http_client(API_BASE_URL, "key", "secret", options)

        assert client.base_url == API_BASE_URL
        assert client.timeout.total == 12.5
        assert client.headers["User-Agent"] == "agent/2.0"
        assert client.headers["Accept"] == "application/json"
        assert client.headers["Authorization"] == "Basic a2V5OnNlY3JldA=="


class TestRestApiManager:
    @pytest.mark.parametrize("api_key, api_secret", [(None, None), ("key", None), ("", "secret")])
    def test_credentials_required_without_handler(self, api_key, api_secret):
        with pytest.raises(ValueError, match="api_key and api_secret are required"):
            RestApiManager(api_key, api_secret)

    def test_injected_handler_is_used_as_is(self, stub_transport, ok):
        handler = RequestHandler(stub_transport(lambda url: ok("{}")))
        manager = RestApiManager(request_handler=handler)
        assert manager.request_handler is handler

    def test_constructor_wires_options(self):
        manager = RestApiManager("key", "secret", ClientOptions(max_concurrent_requests=4))

        handler = manager.request_handler
        assert isinstance(handler.transport, HTTPClient)
        assert handler.gate.limit == 4

    @pytest.mark.asyncio
    async def test_get_groups(self, stub_transport, ok):
        body = '{"data": {"items": [{"id": "g1", "name": "One"}], "next_cursor": null}}'
        transport = stub_transport(lambda url: ok(body))
        manager = RestApiManager(request_handler=RequestHandler(transport))

        groups = [g async for g in manager.get_groups()]

        assert groups == [Group(id="g1", name="One")]
        assert transport.calls == ["groups?limit=100"]

    @pytest.mark.asyncio
    async def test_get_connectors_escapes_group_id(self, stub_transport, ok):
        body = '{"data": {"items": [{"id": "c1", "service": "postgres"}], "next_cursor": null}}'
        transport = stub_transport(lambda url: ok(body))
        manager = RestApiManager(request_handler=RequestHandler(transport))

        connectors = [c async for c in manager.get_connectors("a/b c")]

        assert connectors == [Connector(id="c1", service="postgres")]
        assert transport.calls == ["groups/a%2Fb+c/connectors?limit=100"]

    @pytest.mark.asyncio
    async def test_get_connector_schemas(self, stub_transport, ok):
        body = '{"data": {"schema_change_handling": "ALLOW_COLUMNS", "schemas": {}}}'
        transport = stub_transport(lambda url: ok(body))
        manager = RestApiManager(request_handler=RequestHandler(transport))

        schemas = await manager.get_connector_schemas("conn_1")

        assert isinstance(schemas, DataSchemas)
        assert schemas.schema_change_handling == "ALLOW_COLUMNS"
        assert transport.calls == ["connectors/conn_1/schemas"]

    @pytest.mark.asyncio
    async def test_close_leaves_injected_transport_open(self, stub_transport, ok):
        transport = stub_transport(lambda url: ok("{}"))
        async with RestApiManager(request_handler=RequestHandler(transport)):
            pass
        assert not transport.closed

    @pytest.mark.asyncio
    async def test_close_owned_transport(self):
        manager = RestApiManager("key", "secret")
        transport = manager.request_handler.transport
        session = transport.session

        await manager.close()
        await manager.close()

        assert session.closed

    @pytest.mark.asyncio
    async def test_shared_handler_caches_across_resources(self, stub_transport):
        transport = stub_transport(
            lambda url: Response(url=url, status=200, text='{"data": {"schemas": {}}}')
        )
        manager = RestApiManager(request_handler=RequestHandler(transport))

        await manager.get_connector_schemas("c1")
        await manager.get_connector_schemas("c1")

        assert len(transport.calls) == 1
