"""Configuration loading and credential resolution.

This module handles everything rpsn reads before it talks to the network:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.rpsn/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Profile file** -- ``config.toml`` holding named
  :class:`~rpsn.models.Profile` entries and the ``current_profile``
  pointer, parsed into :class:`~rpsn.models.RpsnConfig`. rpsn only reads
  this file; it is expected to be owner-only (mode ``0600``).
* **Credential resolution** -- :func:`resolve_credentials` merges CLI flags,
  environment variables, and the selected profile into one immutable
  :class:`~rpsn.models.Credentials`.

The environment and the loaded config are passed in explicitly as a
read-only snapshot taken at startup; nothing here consults ``os.environ``
behind the caller's back.
"""

from __future__ import annotations

import os
import platform
import stat
import tomllib
from pathlib import Path
from typing import Mapping, Optional

from pydantic import ValidationError

from rpsn.exceptions import ConfigError, MissingCredentials
from rpsn.models import Credentials, Profile, RpsnConfig
from rpsn.output import warning

_APP_NAME = "rpsn"
_CONFIG_FILENAME = "config.toml"

ENV_SPACE = "REPSONA_SPACE"
ENV_TOKEN = "REPSONA_TOKEN"
ENV_ANTHROPIC_KEY = "ANTHROPIC_API_KEY"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory (not created).

    On Linux/BSD: ``$XDG_CONFIG_HOME/rpsn/`` (default ``~/.config/rpsn/``).
    On macOS/Windows: ``~/.rpsn/``.
    """
    if _is_xdg_platform():
        return _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    return _fallback_base_dir()


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/rpsn/`` (default ``~/.local/share/rpsn/``).
    On macOS/Windows: ``~/.rpsn/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_path() -> Path:
    """Path to ``config.toml`` inside :func:`get_config_dir`."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Profile file ---


def load_config(path: Optional[Path] = None) -> RpsnConfig:
    """Load the profile file.

    Args:
        path: Explicit file path; defaults to :func:`get_config_path`.

    Returns:
        The parsed :class:`~rpsn.models.RpsnConfig`. A missing file yields
        an empty default config.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or does
            not match the expected shape.
    """
    path = path or get_config_path()
    if not path.is_file():
        return RpsnConfig()

    _check_permissions(path)
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config at {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config at {path}: {exc}") from exc

    try:
        return RpsnConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def _check_permissions(path: Path) -> None:
    """Warn when the profile file is readable by group or others."""
    if os.name != "posix":
        return
    mode = stat.S_IMODE(path.stat().st_mode)
    if mode & 0o077:
        warning(
            f"{path} has permissions {mode:04o}; it holds API tokens and "
            f"should be 0600 (chmod 600 {path})"
        )


# --- Credential resolution ---


def select_profile(config: RpsnConfig, flag_profile: Optional[str]) -> Optional[Profile]:
    """Return the profile named by ``--profile``, else the current profile.

    Raises:
        ConfigError: If ``--profile`` names a profile that does not exist.
    """
    if flag_profile:
        profile = config.get_profile(flag_profile)
        if profile is None:
            raise ConfigError(f"Profile '{flag_profile}' not found in config")
        return profile
    return config.get_profile(config.current_profile)


def resolve_credentials(
    flag_space: Optional[str],
    flag_token: Optional[str],
    flag_profile: Optional[str],
    env: Mapping[str, str],
    config: RpsnConfig,
) -> Credentials:
    """Resolve the space id and token with full precedence.

    Precedence per field (high to low):
        1. CLI flags (``--space``, ``--token``)
        2. Environment variables (``REPSONA_SPACE``, ``REPSONA_TOKEN``)
        3. Profile (``--profile``, else ``current_profile`` from the file)

    Empty strings are treated as unset at every level.

    Returns:
        Immutable :class:`~rpsn.models.Credentials`.

    Raises:
        ConfigError: If ``--profile`` names an unknown profile.
        MissingCredentials: If either field is still empty.
    """
    profile = select_profile(config, flag_profile) or Profile()

    space_id = flag_space or env.get(ENV_SPACE) or profile.space_id
    api_token = flag_token or env.get(ENV_TOKEN) or profile.api_token

    missing = []
    if not space_id:
        missing.append(f"space id (--space or {ENV_SPACE})")
    if not api_token:
        missing.append(f"API token (--token or {ENV_TOKEN})")
    if missing:
        raise MissingCredentials(
            "No credentials configured: missing " + " and ".join(missing)
        )
    return Credentials(space_id=space_id, api_token=api_token)


def resolve_anthropic_key(env: Mapping[str, str], config: RpsnConfig) -> str:
    """Return ``ANTHROPIC_API_KEY``, else ``[ai] anthropic_api_key`` from the file.

    Raises:
        ConfigError: If neither is set.
    """
    key = env.get(ENV_ANTHROPIC_KEY) or config.ai.anthropic_api_key
    if not key:
        raise ConfigError(
            f"No Anthropic API key configured: set {ENV_ANTHROPIC_KEY} "
            "or [ai] anthropic_api_key in config.toml"
        )
    return key


def mask_token(token: str) -> str:
    """Show the first 8 characters of a token followed by ``***``."""
    if not token:
        return "(not set)"
    return f"{token[:8]}***"
