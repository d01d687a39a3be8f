"""Fixtures shared by every rpsn test module.

The fake Repsona API and recording sleep live in :mod:`tests.fakes`.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rpsn.models import Credentials
from rpsn.output import OutputFormat, OutputManager, reset_output, set_output
from tests.fakes import SPACE, TOKEN, FakeSleep


# ---------------------------------------------------------------------------
# Output state
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Drop the installed OutputManager once the test ends.

    Its consoles hold the streams that were current when it was built,
    which CliRunner closes after each invocation.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Credentials and fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def creds() -> Credentials:
    return Credentials(space_id=SPACE, api_token=TOKEN)


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


# ---------------------------------------------------------------------------
# Config directories
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config.toml and crash logs under *tmp_path*.

    Forces the XDG layout, unsets the credential variables and NO_COLOR,
    and chdirs into *tmp_path*, which is returned.
    """
    monkeypatch.setattr("rpsn.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["REPSONA_SPACE", "REPSONA_TOKEN", "ANTHROPIC_API_KEY", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_config(isolated_config: Path):
    """Return a function that writes ``config.toml`` (mode 0600) and returns its path."""

    def _write(text: str, mode: int = 0o600) -> Path:
        path = isolated_config / "config" / "rpsn" / "config.toml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        path.chmod(mode)
        return path

    return _write


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()
