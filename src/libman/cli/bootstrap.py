"""Process startup: logging, credentials, remote service, and session."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from rich.logging import RichHandler

from libman.config.credentials import Credentials, MissingCredentialError
from libman.config.global_config import LibmanConfig
from libman.service.base import AuthenticationError, MusicService, ServiceError
from libman.service.spotify import build_spotify_service
from libman.session.models import SessionState

_LOGGER = logging.getLogger(__name__)
_LOGGING_CONFIGURED = False

EXIT_CREDENTIALS = 2
EXIT_AUTHENTICATION = 2
EXIT_CURRENT_USER = 1


class StartupError(RuntimeError):
    """Raised when no session can be started; carries the process exit code."""

    def __init__(self, message: str, *, exit_code: int) -> None:
        """Store diagnostic and exit code.

        Args:
            message: Diagnostic printed before exiting.
            exit_code: Process exit code.
        """
        super().__init__(message)
        self.exit_code = exit_code


def configure_logging(level: str) -> None:
    """Configure Rich-backed logging once per process.

    Args:
        level: Root log level name.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


def connect_service(
    config: LibmanConfig, environ: Mapping[str, str] | None = None
) -> MusicService:
    """Read credentials and build the Spotify-backed service.

    Args:
        config: Effective configuration.
        environ: Optional environment mapping override.

    Returns:
        Remote music service (authorization happens on first call).

    Raises:
        StartupError: If a credential variable is missing.
    """
    try:
        credentials = Credentials.from_env(environ)
    except MissingCredentialError as exc:
        raise StartupError(str(exc), exit_code=EXIT_CREDENTIALS) from exc
    return build_spotify_service(
        credentials, token_cache_path=config.auth.token_cache_path
    )


def start_session(service: MusicService, config: LibmanConfig) -> SessionState:
    """Authenticate and build the session for the current user.

    Args:
        service: Remote music service.
        config: Effective configuration.

    Returns:
        Fresh session state.

    Raises:
        StartupError: If authentication or the current-user lookup fails.
    """
    try:
        user = service.current_user()
    except AuthenticationError as exc:
        _LOGGER.debug("authentication failed: %s", exc)
        raise StartupError("auth failed", exit_code=EXIT_AUTHENTICATION) from exc
    except ServiceError as exc:
        raise StartupError(
            f"could not fetch the current user: {exc}", exit_code=EXIT_CURRENT_USER
        ) from exc
    _LOGGER.info("authenticated as %s", user.id)
    return SessionState(
        user_id=user.id,
        display_name=user.display_name or user.id,
        prompt_text=config.prompt,
    )
