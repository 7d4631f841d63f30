"""Inbound batch processor — one reply per webhook call.

Stages:
1. Plan: pick the first actionable message (pure, no I/O)
2. Execute the planned action against the gateway
3. Audit log the outcome
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from wabot.gateway.base import ActionGateway, GatewayError
from wabot.models import AuditEvent, AuditEventType, InboundBatch, RiskLevel
from wabot.webhook.commands import first_action
from wabot.webhook.models import ActionKind, PlannedAction

if TYPE_CHECKING:
    from wabot.audit.logger import AuditLogger

logger = logging.getLogger(__name__)

NO_ACTION = ""


class BatchProcessor:
    """Turns a webhook batch into at most one outbound gateway call.

    Stateless between calls; the gateway and audit logger are shared,
    read-only collaborators.
    """

    def __init__(
        self,
        gateway: ActionGateway,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._gateway = gateway
        self._audit = audit_logger

    async def process(self, batch: InboundBatch) -> str:
        """Reply to the first actionable message; return the gateway result.

        Returns an empty string when nothing in the batch is actionable.
        GatewayError propagates to the caller.
        """
        action = first_action(batch.messages)
        if action is None:
            logger.debug("No actionable message in batch of %d", len(batch.messages))
            return NO_ACTION

        logger.info("Dispatching %s for chat %s", action.command.value, action.chat_id)
        try:
            result = await self.execute(action)
        except GatewayError as exc:
            logger.warning("Gateway call for %s failed: %s", action.command.value, exc)
            await self._log_outcome(action, AuditEventType.GATEWAY_FAILURE, "failure", {
                "gateway_method": exc.method,
                "status_code": exc.status_code,
            })
            raise

        await self._log_outcome(action, AuditEventType.COMMAND_DISPATCH, "success")
        return result

    async def execute(self, action: PlannedAction) -> str:
        gateway = self._gateway
        if action.kind is ActionKind.SEND_TEXT:
            return await gateway.send_text(action.chat_id, action.text or "")
        if action.kind is ActionKind.SEND_FILE:
            return await gateway.send_file(action.chat_id, action.file_kind or "")
        if action.kind is ActionKind.SEND_VOICE:
            return await gateway.send_voice(action.chat_id)
        if action.kind is ActionKind.SEND_LOCATION:
            return await gateway.send_location(action.chat_id)
        if action.kind is ActionKind.CREATE_GROUP:
            return await gateway.create_group(action.owner or "")
        raise ValueError(f"Unsupported action kind: {action.kind}")

    async def _log_outcome(
        self,
        action: PlannedAction,
        event_type: AuditEventType,
        result: str,
        extra: dict[str, object] | None = None,
    ) -> None:
        if not self._audit:
            return
        details: dict[str, object] = {
            "command": action.command.value,
            "action_kind": action.kind.value,
        }
        if action.file_kind is not None:
            details["file_kind"] = action.file_kind
        details.update(extra or {})
        event = AuditEvent(
            event_type=event_type,
            chat_id=action.chat_id,
            action=action.kind.value,
            result=result,
            risk_level=RiskLevel.INFO if result == "success" else RiskLevel.MEDIUM,
            details=details,
        )
        try:
            await asyncio.to_thread(self._audit.log, event)
        except OSError as exc:
            logger.warning("Audit log write failed: %s", exc)
