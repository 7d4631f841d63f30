"""Data models for the command-dispatch pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wabot.models import Command


class ActionKind(str, Enum):
    SEND_TEXT = "send_text"
    SEND_FILE = "send_file"
    SEND_VOICE = "send_voice"
    SEND_LOCATION = "send_location"
    CREATE_GROUP = "create_group"


@dataclass(frozen=True)
class PlannedAction:
    """The single outbound call chosen for a webhook batch."""

    kind: ActionKind
    command: Command
    chat_id: str
    text: str | None = None
    file_kind: str | None = None
    owner: str | None = None
