"""Shared test fixtures for wabot."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from wabot.audit.logger import AuditLogger
from wabot.config import GatewayConfig
from wabot.gateway.base import ActionGateway
from wabot.models import InboundBatch, InboundMessage


class RecordingGateway(ActionGateway):
    """ActionGateway test double: records calls, returns fixed results."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    async def send_text(self, chat_id: str, text: str) -> str:
        self.calls.append(("send_text", chat_id, text))
        return f"text:{chat_id}"

    async def send_file(self, chat_id: str, file_kind: str) -> str:
        self.calls.append(("send_file", chat_id, file_kind))
        return f"file:{chat_id}:{file_kind}"

    async def send_voice(self, chat_id: str) -> str:
        self.calls.append(("send_voice", chat_id))
        return f"voice:{chat_id}"

    async def send_location(self, chat_id: str) -> str:
        self.calls.append(("send_location", chat_id))
        return f"geo:{chat_id}"

    async def create_group(self, owner: str) -> str:
        self.calls.append(("create_group", owner))
        return f"group:{owner}"


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def mock_audit_logger() -> MagicMock:
    return MagicMock(spec=AuditLogger)


# --- Factory functions for test data ---


def make_message(**kwargs: Any) -> InboundMessage:
    """Factory for InboundMessage with sensible defaults."""
    defaults: dict[str, Any] = {
        "chat_id": "C1",
        "author": "79001234567@c.us",
        "body": "",
        "from_me": False,
    }
    defaults.update(kwargs)
    return InboundMessage(**defaults)


def make_batch(*messages: InboundMessage) -> InboundBatch:
    return InboundBatch(messages=list(messages))


def make_gateway_config(**kwargs: Any) -> GatewayConfig:
    defaults: dict[str, Any] = {
        "api_url": "https://eu1.chat-api.test/instance1/",
        "token": "test-token",
    }
    defaults.update(kwargs)
    return GatewayConfig(**defaults)
