"""Gateway configuration: loaded once at startup, then injected read-only."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_CATALOG_PATH = "config/media-catalog.json"
DEFAULT_TIMEOUT_SECONDS = 30.0


class ConfigError(Exception):
    """Raised when required settings are missing or malformed."""


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    address: str


def _default_files() -> dict[str, str]:
    return {
        kind: f"https://example.com/wabot/sample.{kind}"
        for kind in ("doc", "gif", "jpg", "png", "pdf", "mp3", "mp4")
    }


class MediaCatalog(BaseModel):
    """Fixed content the bot sends back: files, voice clip, location, group."""

    model_config = ConfigDict(frozen=True)

    files: dict[str, str] = Field(default_factory=_default_files)
    voice_url: str = "https://example.com/wabot/sample.ogg"
    location: GeoPoint = GeoPoint(lat=51.178843, lng=-1.826210, address="Stonehenge")
    group_name: str = "Group with the bot"
    group_greeting: str = "This group was created by the bot"

    def file_url(self, file_kind: str) -> str | None:
        return self.files.get(file_kind.lower())


class GatewayConfig(BaseModel):
    """Endpoint, credential and outbound policy for one gateway instance."""

    model_config = ConfigDict(frozen=True)

    api_url: str = Field(min_length=1)
    token: str = Field(min_length=1)
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    media: MediaCatalog = Field(default_factory=MediaCatalog)

    @classmethod
    def from_env(cls) -> GatewayConfig:
        """Build the config from ``CHAT_API_*`` and ``MEDIA_CATALOG_PATH``."""
        try:
            api_url = os.environ["CHAT_API_URL"]
            token = os.environ["CHAT_API_TOKEN"]
        except KeyError as exc:
            raise ConfigError(f"Missing required environment variable: {exc.args[0]}") from exc

        try:
            timeout = float(os.environ.get("CHAT_API_TIMEOUT", DEFAULT_TIMEOUT_SECONDS))
        except ValueError as exc:
            raise ConfigError(f"CHAT_API_TIMEOUT is not a number: {exc}") from exc

        catalog_path = os.environ.get("MEDIA_CATALOG_PATH", DEFAULT_MEDIA_CATALOG_PATH)
        if os.path.exists(catalog_path):
            media = load_media_catalog(catalog_path)
        else:
            logger.warning("Media catalog %s not found, using built-in defaults", catalog_path)
            media = MediaCatalog()

        try:
            return cls(api_url=api_url, token=token, timeout_seconds=timeout, media=media)
        except ValidationError as exc:
            raise ConfigError(f"Invalid gateway configuration: {exc}") from exc


def load_media_catalog(path: str) -> MediaCatalog:
    """Load a media catalog JSON file. Missing keys keep their defaults."""
    catalog_file = Path(path)
    try:
        raw = json.loads(catalog_file.read_text())
        return MediaCatalog.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid media catalog {path}: {exc}") from exc
