"""Click CLI for running and inspecting the bot."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

import click
import uvicorn
from pydantic import ValidationError

from wabot.models import InboundBatch
from wabot.webhook.commands import WELCOME_MENU, first_action


@click.group()
def cli() -> None:
    """chat-api command bot."""


@cli.command()
@click.option("--host", default="0.0.0.0", help="Bind address.")
@click.option("--port", default=8000, type=int, help="Bind port.")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Root log level.",
)
def serve(host: str, port: int, log_level: str) -> None:
    """Run the webhook receiver (config from CHAT_API_* env vars)."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs full request URLs, and chat-api carries the token in the query.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    uvicorn.run(
        "wabot.server.app:create_app_from_env",
        factory=True,
        host=host,
        port=port,
        log_level=log_level,
    )


@cli.command()
@click.argument("batch_file", type=click.Path(exists=True, dir_okay=False))
def plan(batch_file: str) -> None:
    """Show which action a webhook body would trigger, without sending it."""
    try:
        batch = InboundBatch.model_validate_json(Path(batch_file).read_text())
    except ValidationError as exc:
        raise click.ClickException(f"Invalid webhook body: {exc}") from exc

    action = first_action(batch.messages)
    if action is None:
        click.echo("null")
        return
    click.echo(json.dumps(asdict(action), indent=2))


@cli.command()
def menu() -> None:
    """Print the welcome menu sent for unrecognized commands."""
    click.echo(WELCOME_MENU)
