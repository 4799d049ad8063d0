"""Libman configuration and credentials loading."""

from libman.config.credentials import (
    CLIENT_ID_ENV,
    CLIENT_SECRET_ENV,
    REDIRECT_URI_ENV,
    Credentials,
    MissingCredentialError,
)
from libman.config.global_config import (
    AuthSettings,
    ConfigError,
    LibmanConfig,
    LoggingSettings,
    LogLevel,
    PlaylistSettings,
    SearchSettings,
    default_config_path,
    load_config,
)

__all__ = [
    "CLIENT_ID_ENV",
    "CLIENT_SECRET_ENV",
    "REDIRECT_URI_ENV",
    "AuthSettings",
    "ConfigError",
    "Credentials",
    "LibmanConfig",
    "LogLevel",
    "LoggingSettings",
    "MissingCredentialError",
    "PlaylistSettings",
    "SearchSettings",
    "default_config_path",
    "load_config",
]
