"""Tests for rpsn.config -- XDG paths, profile file loading, credential precedence."""

from __future__ import annotations

from pathlib import Path

import pytest

from rpsn.config import (
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
    mask_token,
    resolve_anthropic_key,
    resolve_credentials,
    select_profile,
)
from rpsn.exceptions import ConfigError, MissingCredentials
from rpsn.models import AiSettings, Profile, RpsnConfig
from rpsn.output import OutputManager, set_output


def _config(**profiles: Profile) -> RpsnConfig:
    return RpsnConfig(current_profile="default", profiles=profiles)


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rpsn.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))

        assert get_config_dir() == tmp_path / "cfg" / "rpsn"
        assert get_config_path() == tmp_path / "cfg" / "rpsn" / "config.toml"

    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rpsn.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".config" / "rpsn"

    def test_config_dir_not_created(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rpsn.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))

        assert not get_config_dir().exists()

    def test_fallback_on_macos(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rpsn.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".rpsn"
        assert get_data_dir() == tmp_path / ".rpsn" / "logs"
        assert get_data_dir().is_dir()


# ---------------------------------------------------------------------------
# Profile file
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_missing_file_is_empty_config(self, isolated_config: Path) -> None:
        config = load_config()
        assert config.profiles == {}
        assert config.current_profile == "default"

    def test_loads_profiles(self, write_config) -> None:
        write_config(
            'current_profile = "work"\n'
            "\n"
            "[profiles.work]\n"
            'space_id = "acme"\n'
            'api_token = "tok-work"\n'
            "\n"
            "[profiles.home]\n"
            'space_id = "family"\n'
        )
        config = load_config()

        assert config.current_profile == "work"
        assert config.profiles["work"].api_token == "tok-work"
        assert config.profiles["home"].space_id == "family"
        assert config.profiles["home"].api_token == ""

    def test_loads_ai_table(self, write_config) -> None:
        write_config('[ai]\nanthropic_api_key = "sk-ant-file"\nmodel = "claude-haiku"\n')
        config = load_config()

        assert config.ai.anthropic_api_key == "sk-ant-file"
        assert config.ai.model == "claude-haiku"
        assert "sk-ant-file" not in repr(config)

    def test_invalid_toml_raises_config_error(self, write_config) -> None:
        path = write_config("current_profile = \n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_wrong_shape_raises_config_error(self, write_config) -> None:
        path = write_config('profiles = "nope"\n')
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)

    def test_open_permissions_warn(self, write_config, capfd) -> None:
        set_output(OutputManager(no_color=True))
        write_config('[profiles.default]\nspace_id = "acme"\n', mode=0o644)

        load_config()

        err = capfd.readouterr().err
        assert "Warning:" in err
        assert "0644" in err

    def test_owner_only_permissions_do_not_warn(self, write_config, capfd) -> None:
        set_output(OutputManager(no_color=True))
        write_config('[profiles.default]\nspace_id = "acme"\n')

        load_config()

        assert "Warning:" not in capfd.readouterr().err


# ---------------------------------------------------------------------------
# Credential resolution
# ---------------------------------------------------------------------------


class TestResolveCredentials:
    def test_flag_beats_env_and_profile(self) -> None:
        config = _config(default=Profile(space_id="prof-space", api_token="prof-tok"))
        env = {"REPSONA_SPACE": "env-space", "REPSONA_TOKEN": "env-tok"}

        creds = resolve_credentials("flag-space", "flag-tok", None, env, config)

        assert creds.space_id == "flag-space"
        assert creds.api_token == "flag-tok"

    def test_env_beats_profile(self) -> None:
        config = _config(default=Profile(space_id="prof-space", api_token="prof-tok"))
        env = {"REPSONA_SPACE": "env-space", "REPSONA_TOKEN": "env-tok"}

        creds = resolve_credentials(None, None, None, env, config)

        assert creds.space_id == "env-space"
        assert creds.api_token == "env-tok"

    def test_profile_used_when_nothing_else(self) -> None:
        config = _config(default=Profile(space_id="prof-space", api_token="prof-tok"))

        creds = resolve_credentials(None, None, None, {}, config)

        assert creds.space_id == "prof-space"
        assert creds.api_token == "prof-tok"

    def test_precedence_is_per_field(self) -> None:
        config = _config(default=Profile(space_id="prof-space", api_token="prof-tok"))

        creds = resolve_credentials(None, "flag-tok", None, {"REPSONA_SPACE": "env-space"}, config)

        assert creds.space_id == "env-space"
        assert creds.api_token == "flag-tok"

    def test_empty_values_count_as_unset(self) -> None:
        config = _config(default=Profile(space_id="prof-space", api_token="prof-tok"))
        env = {"REPSONA_SPACE": "", "REPSONA_TOKEN": ""}

        creds = resolve_credentials("", None, None, env, config)

        assert creds.space_id == "prof-space"
        assert creds.api_token == "prof-tok"

    def test_named_profile_overrides_current(self) -> None:
        config = _config(
            default=Profile(space_id="d-space", api_token="d-tok"),
            work=Profile(space_id="w-space", api_token="w-tok"),
        )

        creds = resolve_credentials(None, None, "work", {}, config)

        assert creds.space_id == "w-space"

    def test_unknown_profile_raises(self) -> None:
        with pytest.raises(ConfigError, match="nope"):
            resolve_credentials(None, None, "nope", {}, _config())

    def test_missing_token_names_field_not_value(self) -> None:
        with pytest.raises(MissingCredentials) as exc_info:
            resolve_credentials("acme", None, None, {}, _config())

        message = str(exc_info.value)
        assert "API token" in message
        assert "space id" not in message
        assert "acme" not in message
        assert exc_info.value.exit_code == 3

    def test_missing_both(self) -> None:
        with pytest.raises(MissingCredentials, match="space id .* and API token"):
            resolve_credentials(None, None, None, {}, _config())

    def test_token_hidden_from_repr(self) -> None:
        creds = resolve_credentials("acme", "super-secret", None, {}, _config())
        assert "super-secret" not in repr(creds)


class TestResolveAnthropicKey:
    def test_environment_wins(self) -> None:
        config = RpsnConfig(ai=AiSettings(anthropic_api_key="sk-ant-file"))
        assert resolve_anthropic_key({"ANTHROPIC_API_KEY": "sk-ant-env"}, config) == "sk-ant-env"

    def test_falls_back_to_file(self) -> None:
        config = RpsnConfig(ai=AiSettings(anthropic_api_key="sk-ant-file"))
        assert resolve_anthropic_key({"ANTHROPIC_API_KEY": ""}, config) == "sk-ant-file"

    def test_missing(self) -> None:
        with pytest.raises(ConfigError, match="ANTHROPIC_API_KEY"):
            resolve_anthropic_key({}, RpsnConfig())


class TestSelectProfile:
    def test_current_profile_missing_is_none(self) -> None:
        config = RpsnConfig(current_profile="gone")
        assert select_profile(config, None) is None


class TestMaskToken:
    def test_masks_after_eight(self) -> None:
        assert mask_token("abcdefghijkl") == "abcdefgh***"

    def test_empty(self) -> None:
        assert mask_token("") == "(not set)"
