"""Libman config models and loading helpers."""

from __future__ import annotations

import json
import os
from enum import StrEnum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_PATH_ENV = "LIBMAN_CONFIG"
DEFAULT_PROMPT = "@libman>"


class LogLevel(StrEnum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class SearchSettings(BaseModel):
    """Search result sizing."""

    model_config = ConfigDict(extra="forbid")

    limit: int = Field(default=20, ge=1, le=50)
    mixed_limit: int = Field(default=5, ge=1, le=50)


class PlaylistSettings(BaseModel):
    """Library playlist fetching."""

    model_config = ConfigDict(extra="forbid")

    fetch_limit: int = Field(default=50, ge=1, le=50)


class AuthSettings(BaseModel):
    """OAuth token handling."""

    model_config = ConfigDict(extra="forbid")

    token_cache_path: Path | None = None


class LoggingSettings(BaseModel):
    """Process logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: LogLevel = LogLevel.WARNING


class LibmanConfig(BaseModel):
    """Root libman configuration model."""

    model_config = ConfigDict(extra="forbid")

    prompt: str = Field(default=DEFAULT_PROMPT, min_length=1)
    search: SearchSettings = SearchSettings()
    playlists: PlaylistSettings = PlaylistSettings()
    auth: AuthSettings = AuthSettings()
    logging: LoggingSettings = LoggingSettings()


class ConfigError(RuntimeError):
    """Raised when config cannot be decoded or validated."""


def default_config_path() -> Path:
    """Return the config path from `LIBMAN_CONFIG` or the user config dir.

    Returns:
        Config file path (may not exist).
    """
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "libman" / "config.yaml"


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ConfigError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid config payload: root must be an object")
    return payload


def load_config(path: Path) -> LibmanConfig:
    """Load libman config from disk, defaulting when missing.

    Args:
        path: Config file path.

    Returns:
        Parsed config, or defaults when the file does not exist.

    Raises:
        ConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return LibmanConfig()
    payload = _decode_config_payload(path)
    try:
        return LibmanConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config payload: {exc}") from exc
