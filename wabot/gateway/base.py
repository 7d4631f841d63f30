"""Outbound action capability set required by the batch processor."""

from __future__ import annotations

from abc import ABC, abstractmethod


class GatewayError(Exception):
    """Raised when an outbound gateway call fails or is rejected."""

    def __init__(self, method: str, status_code: int | None = None, detail: str = "") -> None:
        self.method = method
        self.status_code = status_code
        self.detail = detail
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Gateway call '{method}' failed{status}: {detail}")


class ActionGateway(ABC):
    """Outbound actions against a single gateway instance.

    Implementations hold only immutable configuration and must be safe to
    share across concurrent webhook calls. Each method returns the
    gateway's textual result and raises GatewayError on failure.
    """

    @abstractmethod
    async def send_text(self, chat_id: str, text: str) -> str: ...

    @abstractmethod
    async def send_file(self, chat_id: str, file_kind: str) -> str: ...

    @abstractmethod
    async def send_voice(self, chat_id: str) -> str: ...

    @abstractmethod
    async def send_location(self, chat_id: str) -> str: ...

    @abstractmethod
    async def create_group(self, owner: str) -> str: ...
