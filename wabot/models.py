"""Shared Pydantic data models for wabot."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enums ---


class Command(str, Enum):
    CHAT_ID = "chatid"
    FILE = "file"
    OGG = "ogg"
    GEO = "geo"
    GROUP = "group"
    UNRECOGNIZED = "unrecognized"


class AuditEventType(str, Enum):
    COMMAND_DISPATCH = "command_dispatch"
    GATEWAY_FAILURE = "gateway_failure"


class RiskLevel(str, Enum):
    MEDIUM = "medium"
    INFO = "info"


# --- Webhook Models ---


class InboundMessage(BaseModel):
    """One message as delivered in the gateway's webhook body."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    chat_id: str = Field(alias="chatId")
    author: str = ""
    body: str = ""
    from_me: bool = Field(default=False, alias="fromMe")

    @field_validator("body", "author", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return "" if value is None else value


class InboundBatch(BaseModel):
    """Webhook body: ordered messages plus the sending instance id.

    Acknowledgement-only callbacks carry no ``messages`` and parse to an
    empty batch.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    messages: list[InboundMessage] = Field(default_factory=list)
    instance_id: str | None = Field(default=None, alias="instanceId")


# --- Audit Models ---


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class AuditEvent(BaseModel):
    timestamp: str = Field(default_factory=_now_iso)
    event_type: AuditEventType
    chat_id: str | None = None
    action: str
    result: str  # "success" | "failure"
    risk_level: RiskLevel
    details: dict[str, object] | None = None
