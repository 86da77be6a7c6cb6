"""Precise unit tests for HTTPClient.

Tests focus on session management, URL resolution and response materialization.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from fivetran.client.runtime.rest import HTTPClient, Response


def _mock_session(status: int = 200, text: str = "{}", headers: dict | None = None) -> MagicMock:
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value=text)
    mock_response.headers = headers or {}
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = MagicMock()
    mock_session.closed = False
    mock_session.get = MagicMock(return_value=mock_response)
    return mock_session


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        client = HTTPClient(timeout=10.0)
        assert client.timeout.total == 10.0
        assert client._session is None

    @pytest.mark.parametrize("timeout", [0, -5])
    def test_non_positive_timeout_rejected(self, timeout):
        with pytest.raises(ValueError, match="Timeout must be a positive value"):
            HTTPClient(timeout=timeout)

    @pytest.mark.asyncio
    async def test_session_carries_default_headers(self):
        client = HTTPClient(headers={"User-Agent": "ua/1.0"})
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert session.headers["User-Agent"] == "ua/1.0"
        await client.close()

    def test_basic_auth_becomes_default_header(self):
        client = HTTPClient(auth=aiohttp.BasicAuth("key", "secret"))
        assert client.headers == {"Authorization": "Basic a2V5OnNlY3JldA=="}

    @pytest.mark.asyncio
    async def test_session_sends_auth_header(self):
        client = HTTPClient(
            headers={"Accept": "application/json"}, auth=aiohttp.BasicAuth("key", "secret")
        )
        session = client.session
        assert session.headers["Authorization"] == "Basic a2V5OnNlY3JldA=="
        assert session.headers["Accept"] == "application/json"
        await client.close()

    @pytest.mark.asyncio
    async def test_session_property_recreates_closed_session(self):
        client = HTTPClient()
        session1 = client.session
        await session1.close()

        session2 = client.session
        assert session1 is not session2
        assert not session2.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        await client.close()
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HTTPClient() as client:
            assert client.session is not None

        assert client._session is None or client._session.closed


class TestHTTPClientRequests:
    """Test HTTPClient.get()."""

    def test_resolve_relative_path(self):
        client = HTTPClient(base_url="https://api.fivetran.com/v1/")
        assert client.resolve("groups?limit=100") == "https://api.fivetran.com/v1/groups?limit=100"

    def test_resolve_absolute_url_untouched(self):
        client = HTTPClient(base_url="https://api.fivetran.com/v1/")
        assert client.resolve("https://other.com/x") == "https://other.com/x"

    @pytest.mark.asyncio
    async def test_get_materializes_response(self):
        client = HTTPClient(base_url="https://api.fivetran.com/v1/")
        client._session = _mock_session(text='{"data": {"id": "1"}}')

        response = await client.get("groups/1")

        assert isinstance(response, Response)
        assert response.url == "groups/1"
        assert response.status == 200
        assert response.ok
        assert response.json() == {"data": {"id": "1"}}
        call_args = client._session.get.call_args
        assert "https://api.fivetran.com/v1/groups/1" in str(call_args)

    @pytest.mark.asyncio
    async def test_get_does_not_raise_on_error_status(self):
        """Status handling belongs to the request handler."""
        client = HTTPClient()
        client._session = _mock_session(status=429, text="", headers={"Retry-After": "5"})

        response = await client.get("https://api.example.com/x")

        assert response.status == 429
        assert not response.ok
        assert response.headers == {"Retry-After": "5"}
