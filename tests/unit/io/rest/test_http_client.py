"""Precise unit tests for HTTPClient.

Tests focus on session management and the mapping of failures to TransportError.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from drupal.jsonapi.core import TransportError
from drupal.jsonapi.runtime.rest import HTTPClient


def mock_session_for(response) -> MagicMock:
    mock_session = MagicMock()
    mock_session.closed = False  # Important: session property checks this
    mock_session.get = MagicMock(return_value=response)
    return mock_session


def mock_response(status: int = 200, text: str = '{"data": []}', reason: str = "OK") -> AsyncMock:
    response = AsyncMock()
    response.status = status
    response.reason = reason
    response.text = AsyncMock(return_value=text)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        """Test HTTPClient initialization."""
        client = HTTPClient(timeout=10.0, headers={"Accept": "application/vnd.api+json"})
        assert client.timeout.total == 10.0
        assert client.headers == {"Accept": "application/vnd.api+json"}
        assert client._session is None

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        """Test session property creates session when needed."""
        client = HTTPClient()
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_session_property_recreates_closed_session(self):
        """Test session property recreates closed session."""
        client = HTTPClient()
        session1 = client.session
        await session1.close()

        session2 = client.session
        assert session1 is not session2
        assert not session2.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        """Test close() can be called multiple times."""
        client = HTTPClient()
        await client.close()
        await client.close()  # Should not raise

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test HTTPClient as async context manager."""
        async with HTTPClient() as client:
            assert client.session is not None

        assert client._session is None or client._session.closed


class TestHTTPClientGetJSON:
    """Test get_json success and failure paths."""

    @pytest.mark.asyncio
    async def test_returns_decoded_body(self):
        client = HTTPClient()
        client._session = mock_session_for(mock_response(text='{"data": [{"type": "t", "id": "1"}]}'))

        body = await client.get_json("https://example.com/jsonapi", headers={"Accept": "x"})

        assert body == {"data": [{"type": "t", "id": "1"}]}
        client._session.get.assert_called_once_with(
            "https://example.com/jsonapi", params=None, headers={"Accept": "x"}
        )

    @pytest.mark.asyncio
    async def test_relative_url_uses_base_url(self):
        client = HTTPClient(base_url="https://example.com")
        client._session = mock_session_for(mock_response())

        await client.get_json("/jsonapi")

        assert client._session.get.call_args.args[0] == "https://example.com/jsonapi"

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        """Test non-success status codes become TransportError."""
        client = HTTPClient()
        client._session = mock_session_for(mock_response(status=503, reason="Service Unavailable"))

        with pytest.raises(TransportError) as exc_info:
            await client.get_json("https://example.com/jsonapi")

        assert exc_info.value.status_code == 503
        assert exc_info.value.url == "https://example.com/jsonapi"
        assert "Service Unavailable" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self):
        client = HTTPClient()
        client._session = mock_session_for(mock_response(text="<html>oops</html>"))

        with pytest.raises(TransportError, match="malformed JSON") as exc_info:
            await client.get_json("https://example.com/jsonapi")
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_client_error_raises(self):
        client = HTTPClient()
        client._session = MagicMock()
        client._session.closed = False
        client._session.get = MagicMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(TransportError) as exc_info:
            await client.get_json("https://example.com/jsonapi")
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        client = HTTPClient()
        client._session = MagicMock()
        client._session.closed = False
        client._session.get = MagicMock(side_effect=asyncio.TimeoutError())

        with pytest.raises(TransportError, match="timed out"):
            await client.get_json("https://example.com/jsonapi")
