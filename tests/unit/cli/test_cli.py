"""Unit tests for the libman CLI entrypoint."""

from __future__ import annotations

from pathlib import Path

import pytest
from _pytest.monkeypatch import MonkeyPatch
from typer.testing import CliRunner

from libman.cli import cli as cli_module
from libman.cli.cli import app
from libman.config.global_config import LibmanConfig
from libman.service.base import AuthenticationError, ServiceError
from tests.unit.fakes import FakeMusicService

_RUNNER = CliRunner()
_CREDENTIAL_VARS = ("LIBMAN_ID", "LIBMAN_SECRET", "LIBMAN_REDIRECT_URI")


def _stub_service(monkeypatch: MonkeyPatch, service: FakeMusicService) -> None:
    """Replace the Spotify-backed service with an in-memory double.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        service: Service returned by `connect_service`.
    """

    def _connect(config: LibmanConfig) -> FakeMusicService:
        del config
        return service

    monkeypatch.setattr(cli_module, "connect_service", _connect)


@pytest.mark.unit
def test_missing_credentials_exit_with_code_two(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """Startup should stop before any remote call when a variable is unset."""
    # Arrange - clear credential environment
    for name in _CREDENTIAL_VARS:
        monkeypatch.delenv(name, raising=False)

    # Act - start the shell
    result = _RUNNER.invoke(
        app, ["--config-file", str(tmp_path / "missing.yaml")], input=""
    )

    # Assert - diagnostic and exit code
    assert result.exit_code == 2
    assert "you must set the LIBMAN_ID env variable" in result.stdout


@pytest.mark.unit
def test_authentication_failure_exits_with_code_two(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """OAuth failures should print `auth failed`."""
    service = FakeMusicService(
        failures={"current_user": AuthenticationError("invalid_client")}
    )
    _stub_service(monkeypatch, service)

    result = _RUNNER.invoke(
        app, ["--config-file", str(tmp_path / "missing.yaml")], input=""
    )

    assert result.exit_code == 2
    assert "auth failed" in result.stdout
    assert "welcome" not in result.stdout


@pytest.mark.unit
def test_current_user_failure_exits_with_code_one(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """Other failures fetching the user should exit with code 1."""
    _stub_service(
        monkeypatch, FakeMusicService(failures={"current_user": ServiceError("down")})
    )

    result = _RUNNER.invoke(
        app, ["--config-file", str(tmp_path / "missing.yaml")], input=""
    )

    assert result.exit_code == 1
    assert "could not fetch the current user: down" in result.stdout


@pytest.mark.unit
def test_session_greets_user_and_says_bye_on_eof(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """A started session greets the user and ends cleanly at end of input."""
    # Arrange - stub service and empty config
    service = FakeMusicService()
    _stub_service(monkeypatch, service)

    # Act - one blank line (toggle), then EOF
    result = _RUNNER.invoke(
        app, ["--config-file", str(tmp_path / "missing.yaml")], input="\n"
    )

    # Assert - greeting, toggle call, and farewell
    assert result.exit_code == 0
    assert "welcome Ada" in result.stdout
    assert "@libman>" in result.stdout
    assert "bye" in result.stdout
    assert service.mutating_calls() == ["start_playback"]


@pytest.mark.unit
def test_config_prompt_is_used(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """The configured prompt replaces the default one."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("prompt: '~>'\n", encoding="utf-8")
    _stub_service(monkeypatch, FakeMusicService())

    result = _RUNNER.invoke(app, ["--config-file", str(config_path)], input="")

    assert result.exit_code == 0
    assert "~>" in result.stdout
    assert "@libman>" not in result.stdout


@pytest.mark.unit
def test_invalid_config_falls_back_to_defaults(
    monkeypatch: MonkeyPatch, tmp_path: Path
) -> None:
    """Invalid config should warn and continue with defaults."""
    # Arrange - malformed yaml config
    config_path = tmp_path / "config.yaml"
    config_path.write_text("prompt: [unclosed\n", encoding="utf-8")
    _stub_service(monkeypatch, FakeMusicService())

    # Act - start the shell
    result = _RUNNER.invoke(app, ["--config-file", str(config_path)], input="")

    # Assert - warning then a normal session
    assert result.exit_code == 0
    assert "Config warning:" in result.stdout
    assert "welcome Ada" in result.stdout
