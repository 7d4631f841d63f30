"""Command classification and first-match-wins action planning.

Everything here is pure: it turns inbound messages into at most one
``PlannedAction`` without touching the gateway.
"""

from __future__ import annotations

from collections.abc import Iterable

from wabot.models import Command, InboundMessage
from wabot.webhook.models import ActionKind, PlannedAction

WELCOME_MENU = (
    "Bot's menu: \n"
    "1. chatid - Get chatid\n"
    "2. file doc/gif,jpg,png,pdf,mp3,mp4 - Get a file in the desired format\n"
    "3. ogg - Get a voice message\n"
    "4. geo - Get the geolocation\n"
    "5. group - Create a group with a bot"
)

_KEYWORDS = {command.value: command for command in Command if command is not Command.UNRECOGNIZED}


def tokenize(body: str) -> list[str]:
    return body.split()


def classify(token: str) -> Command:
    """Map a command keyword to a Command, ignoring case."""
    return _KEYWORDS.get(token.lower(), Command.UNRECOGNIZED)


def chat_id_reply(chat_id: str) -> str:
    return f"Your ID: {chat_id}"


def plan_action(message: InboundMessage) -> PlannedAction | None:
    """Return the action a single message asks for, or None to skip it.

    Skipped: the bot's own messages, empty bodies, and ``file`` with no
    file kind. Any other first word falls back to the welcome menu.
    """
    if message.from_me:
        return None

    tokens = tokenize(message.body)
    if not tokens:
        return None

    command = classify(tokens[0])
    chat_id = message.chat_id

    if command is Command.CHAT_ID:
        return PlannedAction(ActionKind.SEND_TEXT, command, chat_id, text=chat_id_reply(chat_id))
    if command is Command.FILE:
        if len(tokens) < 2:
            return None
        return PlannedAction(ActionKind.SEND_FILE, command, chat_id, file_kind=tokens[1])
    if command is Command.OGG:
        return PlannedAction(ActionKind.SEND_VOICE, command, chat_id)
    if command is Command.GEO:
        return PlannedAction(ActionKind.SEND_LOCATION, command, chat_id)
    if command is Command.GROUP:
        return PlannedAction(ActionKind.CREATE_GROUP, command, chat_id, owner=message.author)
    return PlannedAction(ActionKind.SEND_TEXT, command, chat_id, text=WELCOME_MENU)


def first_action(messages: Iterable[InboundMessage]) -> PlannedAction | None:
    """Scan messages in order and return the first actionable one's plan."""
    planned = (plan_action(message) for message in messages)
    return next((action for action in planned if action is not None), None)
