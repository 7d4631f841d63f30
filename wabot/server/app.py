"""FastAPI webhook receiver application."""

from __future__ import annotations

import os

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from wabot.audit.logger import AuditLogger
from wabot.config import GatewayConfig
from wabot.gateway.base import GatewayError
from wabot.gateway.chat_api import ChatApiGateway
from wabot.models import InboundBatch
from wabot.webhook.processor import BatchProcessor


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    config = GatewayConfig.from_env()
    audit_log = os.environ.get("AUDIT_LOG_PATH")
    audit_logger = AuditLogger.from_env(audit_log) if audit_log else None
    processor = BatchProcessor(ChatApiGateway(config), audit_logger=audit_logger)
    return create_app(processor)


def create_app(processor: BatchProcessor) -> FastAPI:
    """Create the webhook app around an already-wired processor."""
    app = FastAPI(docs_url=None, redoc_url=None)

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> PlainTextResponse:
        return PlainTextResponse("Gateway request failed", status_code=502)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/", response_class=PlainTextResponse)
    async def webhook(batch: InboundBatch) -> PlainTextResponse:
        result = await processor.process(batch)
        return PlainTextResponse(result)

    return app
