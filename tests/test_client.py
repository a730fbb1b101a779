"""Unit tests for client.py - the aiohttp transport."""

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from client import NetBoxClient, Page
from config import NetBoxConfig
from exceptions import FetchError, UpdateError, ValidationError


def mock_session_for(method, status=200, body=None, text=""):
    """Build a ClientSession mock whose `method` returns one response."""
    mock_resp = AsyncMock()
    mock_resp.status = status
    mock_resp.json = AsyncMock(return_value=body)
    mock_resp.text = AsyncMock(return_value=text)

    mock_session = AsyncMock()
    setattr(
        mock_session,
        method,
        MagicMock(
            return_value=AsyncMock(
                __aenter__=AsyncMock(return_value=mock_resp),
                __aexit__=AsyncMock(return_value=False),
            )
        ),
    )

    session_cm = AsyncMock(
        __aenter__=AsyncMock(return_value=mock_session),
        __aexit__=AsyncMock(return_value=False),
    )
    return mock_session, session_cm


@pytest.fixture
def client():
    return NetBoxClient(
        NetBoxConfig(
            url="https://netbox.example.com/",
            token="0123456789abcdef",
            page_limit=25,
        )
    )


class TestNetBoxClientInit:
    """Tests for NetBoxClient construction."""

    def test_headers_include_token(self, client):
        headers = client._get_headers()
        assert headers["Authorization"] == "Token 0123456789abcdef"
        assert headers["Accept"] == "application/json"

    def test_no_token_no_auth_header(self):
        client = NetBoxClient(NetBoxConfig(token=""))
        assert "Authorization" not in client._get_headers()

    def test_urls(self, client):
        assert (
            client._collection_url("dcim/devices")
            == "https://netbox.example.com/api/dcim/devices/"
        )
        assert (
            client._record_url("/dcim/devices/", 42)
            == "https://netbox.example.com/api/dcim/devices/42/"
        )


@pytest.mark.asyncio
class TestNetBoxClientList:
    """Tests for NetBoxClient.list."""

    async def test_list_returns_page(self, client):
        body = {
            "count": 3,
            "next": "https://netbox.example.com/api/dcim/sites/?limit=2&offset=2",
            "previous": None,
            "results": [{"id": 1}, {"id": 2}],
        }
        mock_session, session_cm = mock_session_for("get", body=body)

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            result = await client.list("dcim/sites", params={"id": 1}, offset=0)

        assert result == Page(results=[{"id": 1}, {"id": 2}], next=body["next"], count=3)
        url = mock_session.get.call_args.args[0]
        params = mock_session.get.call_args.kwargs["params"]
        assert url == "https://netbox.example.com/api/dcim/sites/"
        assert params == {"id": "1", "offset": "0", "limit": "25"}

    async def test_list_null_results(self, client):
        mock_session, session_cm = mock_session_for(
            "get", body={"count": 0, "next": None, "results": None}
        )

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            result = await client.list("dcim/sites")

        assert result.results == []
        assert result.next is None

    async def test_list_http_error(self, client):
        mock_session, session_cm = mock_session_for(
            "get", status=503, text="Service Unavailable"
        )

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(FetchError) as exc_info:
                await client.list("dcim/sites")

        assert exc_info.value.status == 503
        assert "Service Unavailable" in exc_info.value.message

    async def test_list_connection_error(self, client):
        with patch(
            "client.aiohttp.ClientSession",
            side_effect=aiohttp.ClientConnectionError("refused"),
        ):
            with pytest.raises(FetchError, match="refused"):
                await client.list("dcim/sites")


@pytest.mark.asyncio
class TestNetBoxClientWrites:
    """Tests for create, partial_update and delete."""

    async def test_create(self, client):
        mock_session, session_cm = mock_session_for(
            "post", status=201, body={"id": 7, "name": "ams1"}
        )

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            record = await client.create("dcim/sites", {"name": "ams1"})

        assert record == {"id": 7, "name": "ams1"}
        assert mock_session.post.call_args.kwargs["json"] == {"name": "ams1"}

    async def test_create_rejected(self, client):
        mock_session, session_cm = mock_session_for(
            "post", status=400, text='{"slug": ["already exists"]}'
        )

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(ValidationError, match="already exists"):
                await client.create("dcim/sites", {"name": "ams1"})

    async def test_partial_update(self, client):
        mock_session, session_cm = mock_session_for(
            "patch", body={"id": 7, "status": {"value": "planned"}}
        )

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            record = await client.partial_update("dcim/sites", 7, {"status": "planned"})

        assert record["id"] == 7
        assert (
            mock_session.patch.call_args.args[0]
            == "https://netbox.example.com/api/dcim/sites/7/"
        )

    async def test_partial_update_rejected(self, client):
        mock_session, session_cm = mock_session_for("patch", status=400, text="bad")

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(UpdateError):
                await client.partial_update("dcim/sites", 7, {"status": "x"})

    async def test_delete(self, client):
        mock_session, session_cm = mock_session_for("delete", status=204)

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            assert await client.delete("dcim/sites", 7) is None

        mock_session.delete.assert_called_once()

    async def test_delete_failure(self, client):
        mock_session, session_cm = mock_session_for("delete", status=409, text="in use")

        with patch("client.aiohttp.ClientSession", return_value=session_cm):
            with pytest.raises(FetchError) as exc_info:
                await client.delete("dcim/sites", 7)

        assert exc_info.value.status == 409
