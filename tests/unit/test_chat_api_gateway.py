"""Tests for the chat-api outbound gateway."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from tests.conftest import make_gateway_config
from wabot.config import GeoPoint, MediaCatalog
from wabot.gateway.base import GatewayError
from wabot.gateway.chat_api import UNKNOWN_FILE_KIND_REPLY, ChatApiGateway


def _make_gateway(**kwargs: Any) -> ChatApiGateway:
    return ChatApiGateway(make_gateway_config(**kwargs))


@pytest.fixture
def mock_client() -> Iterator[AsyncMock]:
    with patch("wabot.gateway.chat_api.httpx.AsyncClient") as mock_client_cls:
        client = AsyncMock()
        client.post.return_value = MagicMock(status_code=200, text='{"sent":true}')
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)
        mock_client_cls.return_value = client
        client.client_cls = mock_client_cls
        yield client


def _posted(client: AsyncMock) -> tuple[str, dict[str, Any]]:
    call = client.post.call_args
    return call[0][0], call[1]


class TestRequestShape:
    @pytest.mark.asyncio
    async def test_send_text(self, mock_client: AsyncMock) -> None:
        gateway = _make_gateway()
        result = await gateway.send_text("C1@c.us", "hi")

        assert result == '{"sent":true}'
        url, kwargs = _posted(mock_client)
        assert url == "https://eu1.chat-api.test/instance1/sendMessage"
        assert kwargs["params"] == {"token": "test-token"}
        assert kwargs["json"] == {"chatId": "C1@c.us", "body": "hi"}

    @pytest.mark.asyncio
    async def test_tls_and_timeout(self, mock_client: AsyncMock) -> None:
        gateway = _make_gateway(timeout_seconds=5.0)
        await gateway.send_voice("C1")

        mock_client.client_cls.assert_called_once_with(verify=True)
        _, kwargs = _posted(mock_client)
        assert kwargs["timeout"] == 5.0

    @pytest.mark.asyncio
    async def test_url_without_trailing_slash(self, mock_client: AsyncMock) -> None:
        gateway = _make_gateway(api_url="https://eu1.chat-api.test/instance1")
        await gateway.send_location("C1")
        url, _ = _posted(mock_client)
        assert url == "https://eu1.chat-api.test/instance1/sendLocation"

    @pytest.mark.asyncio
    async def test_send_file_known_kind(self, mock_client: AsyncMock) -> None:
        media = MediaCatalog(files={"jpg": "https://cdn.test/cat.jpg"})
        gateway = _make_gateway(media=media)
        await gateway.send_file("C1", "JPG")

        url, kwargs = _posted(mock_client)
        assert url.endswith("/sendFile")
        assert kwargs["json"] == {
            "chatId": "C1",
            "body": "https://cdn.test/cat.jpg",
            "filename": "file.jpg",
        }

    @pytest.mark.asyncio
    async def test_send_file_unknown_kind_replies_with_text(
        self, mock_client: AsyncMock,
    ) -> None:
        gateway = _make_gateway()
        await gateway.send_file("C1", "exe")

        url, kwargs = _posted(mock_client)
        assert url.endswith("/sendMessage")
        assert kwargs["json"] == {"chatId": "C1", "body": UNKNOWN_FILE_KIND_REPLY}

    @pytest.mark.asyncio
    async def test_send_voice(self, mock_client: AsyncMock) -> None:
        media = MediaCatalog(voice_url="https://cdn.test/hello.ogg")
        gateway = _make_gateway(media=media)
        await gateway.send_voice("C1")

        url, kwargs = _posted(mock_client)
        assert url.endswith("/sendPTT")
        assert kwargs["json"] == {"chatId": "C1", "audio": "https://cdn.test/hello.ogg"}

    @pytest.mark.asyncio
    async def test_send_location(self, mock_client: AsyncMock) -> None:
        media = MediaCatalog(location=GeoPoint(lat=1.5, lng=-2.5, address="Here"))
        gateway = _make_gateway(media=media)
        await gateway.send_location("C1")

        _, kwargs = _posted(mock_client)
        assert kwargs["json"] == {"chatId": "C1", "lat": 1.5, "lng": -2.5, "address": "Here"}

    @pytest.mark.asyncio
    async def test_create_group_strips_chat_suffix(self, mock_client: AsyncMock) -> None:
        media = MediaCatalog(group_name="G", group_greeting="Welcome")
        gateway = _make_gateway(media=media)
        await gateway.create_group("79001234567@c.us")

        url, kwargs = _posted(mock_client)
        assert url.endswith("/group")
        assert kwargs["json"] == {
            "groupName": "G",
            "phones": ["79001234567"],
            "messageText": "Welcome",
        }


class TestFailures:
    @pytest.mark.asyncio
    async def test_error_status_raises(self, mock_client: AsyncMock) -> None:
        mock_client.post.return_value = MagicMock(status_code=401, text="bad token")
        gateway = _make_gateway()

        with pytest.raises(GatewayError) as exc_info:
            await gateway.send_text("C1", "hi")

        assert exc_info.value.method == "sendMessage"
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "bad token"

    @pytest.mark.asyncio
    async def test_no_retry(self, mock_client: AsyncMock) -> None:
        mock_client.post.return_value = MagicMock(status_code=503, text="")
        gateway = _make_gateway()

        with pytest.raises(GatewayError):
            await gateway.send_voice("C1")

        assert mock_client.post.call_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [httpx.ConnectError("refused"), httpx.ReadTimeout("slow")],
    )
    async def test_transport_error_raises(
        self, mock_client: AsyncMock, error: Exception,
    ) -> None:
        mock_client.post.side_effect = error
        gateway = _make_gateway()

        with pytest.raises(GatewayError) as exc_info:
            await gateway.send_location("C1")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.TransportError)
