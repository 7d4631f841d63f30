"""chat-api.com client: the production ActionGateway.

Every call is ``POST <api_url>/<method>?token=<token>`` with a JSON body.
The raw response text is handed back unchanged as the action result.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from wabot.config import GatewayConfig
from wabot.gateway.base import ActionGateway, GatewayError

logger = logging.getLogger(__name__)

UNKNOWN_FILE_KIND_REPLY = "No file with this format"
_PERSONAL_CHAT_SUFFIX = "@c.us"


class ChatApiGateway(ActionGateway):
    """Sends bot replies through the chat-api HTTP interface."""

    def __init__(self, config: GatewayConfig) -> None:
        self._config = config

    async def send_text(self, chat_id: str, text: str) -> str:
        return await self._request("sendMessage", {"chatId": chat_id, "body": text})

    async def send_file(self, chat_id: str, file_kind: str) -> str:
        url = self._config.media.file_url(file_kind)
        if url is None:
            logger.info("No media configured for file kind %r", file_kind)
            return await self.send_text(chat_id, UNKNOWN_FILE_KIND_REPLY)
        return await self._request("sendFile", {
            "chatId": chat_id,
            "body": url,
            "filename": f"file.{file_kind.lower()}",
        })

    async def send_voice(self, chat_id: str) -> str:
        return await self._request("sendPTT", {
            "chatId": chat_id,
            "audio": self._config.media.voice_url,
        })

    async def send_location(self, chat_id: str) -> str:
        location = self._config.media.location
        return await self._request("sendLocation", {
            "chatId": chat_id,
            "lat": location.lat,
            "lng": location.lng,
            "address": location.address,
        })

    async def create_group(self, owner: str) -> str:
        phone = owner.removesuffix(_PERSONAL_CHAT_SUFFIX)
        return await self._request("group", {
            "groupName": self._config.media.group_name,
            "phones": [phone],
            "messageText": self._config.media.group_greeting,
        })

    async def _request(self, method: str, payload: dict[str, Any]) -> str:
        url = f"{self._config.api_url.rstrip('/')}/{method}"
        params = {"token": self._config.token}

        try:
            async with httpx.AsyncClient(verify=True) as client:
                resp = await client.post(
                    url, params=params, json=payload, timeout=self._config.timeout_seconds,
                )
        except httpx.TransportError as exc:
            raise GatewayError(method, detail=str(exc) or type(exc).__name__) from exc

        if resp.status_code >= 400:
            raise GatewayError(method, status_code=resp.status_code, detail=resp.text)

        logger.debug("Gateway %s -> HTTP %s", method, resp.status_code)
        return resp.text
