"""Tests for the multi-source configuration loader."""

import os
from pathlib import Path

import pytest

from livephoto_repair.common import ConfigLoader, ConfigurationError
from livephoto_repair.config import LivePhotoRepairConfig


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """No system, user or environment config leaks into the test."""
    user_dir = tmp_path / "user-config"
    user_dir.mkdir()
    monkeypatch.setattr(
        "livephoto_repair.common.config.platformdirs.user_config_dir",
        lambda appname=None, appauthor=None: str(user_dir),
    )
    monkeypatch.setattr(ConfigLoader, "_load_system_config", lambda self: None)
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("LIVEPHOTO_REPAIR_"):
            monkeypatch.delenv(key)
    return user_dir


def loader():
    return ConfigLoader(app_name="livephoto-repair", config_class=LivePhotoRepairConfig)


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_defaults_without_files(self, isolated):
        """Without any file the model defaults apply."""
        config = loader().load()
        assert config.matcher.max_time_delta == 4.0
        assert config.builder.heic_quality == 90
        assert config.scanner.use_exiftool is True

    def test_explicit_defaults_file(self, isolated, tmp_path):
        """An explicit defaults.toml is read."""
        path = tmp_path / "custom.toml"
        path.write_text("[matcher]\nmax_time_delta = 2.5\n", encoding="utf-8")

        config = loader().load(defaults_path=path)

        assert config.matcher.max_time_delta == 2.5

    def test_cwd_defaults_file(self, isolated, tmp_path):
        """./config/defaults.toml is picked up automatically."""
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "defaults.toml").write_text(
            "[builder]\nimage_suffix = \"_lp\"\n", encoding="utf-8"
        )

        assert loader().load().builder.image_suffix == "_lp"

    def test_user_config_overrides_defaults(self, isolated, tmp_path):
        """User config wins over defaults."""
        path = tmp_path / "defaults.toml"
        path.write_text("[matcher]\nmax_numeric_delta = 2\n", encoding="utf-8")
        (isolated / "config.toml").write_text("[matcher]\nmax_numeric_delta = 3\n", encoding="utf-8")

        assert loader().load(defaults_path=path).matcher.max_numeric_delta == 3

    def test_env_overrides_files(self, isolated, monkeypatch):
        """Environment variables win over files; key underscores are preserved."""
        (isolated / "config.toml").write_text("[matcher]\nmax_time_delta = 3.0\n", encoding="utf-8")
        monkeypatch.setenv("LIVEPHOTO_REPAIR_MATCHER_MAX_TIME_DELTA", "1.5")
        monkeypatch.setenv("LIVEPHOTO_REPAIR_SCANNER_USE_FFPROBE", "false")
        monkeypatch.setenv("LIVEPHOTO_REPAIR_LOGGING_LEVEL", "debug")

        config = loader().load()

        assert config.matcher.max_time_delta == 1.5
        assert config.scanner.use_ffprobe is False
        assert config.logging.level == "DEBUG"

    def test_env_integer_stays_integer(self, isolated, monkeypatch):
        """"1" is a number, not a boolean."""
        monkeypatch.setenv("LIVEPHOTO_REPAIR_MATCHER_MAX_NUMERIC_DELTA", "1")
        assert loader().load().matcher.max_numeric_delta == 1

    def test_missing_explicit_file(self, isolated, tmp_path):
        """A missing --config file is an error."""
        with pytest.raises(ConfigurationError) as exc_info:
            loader().load(defaults_path=tmp_path / "nope.toml")
        assert exc_info.value.context["path"].endswith("nope.toml")

    def test_invalid_toml(self, isolated, tmp_path):
        """Syntax errors surface as ConfigurationError."""
        path = tmp_path / "broken.toml"
        path.write_text("[matcher\nmax_time_delta = ", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            loader().load(defaults_path=path)

    def test_invalid_value(self, isolated, tmp_path):
        """Validation errors surface as ConfigurationError."""
        path = tmp_path / "bad.toml"
        path.write_text("[builder]\nheic_quality = 150\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            loader().load(defaults_path=path)

    def test_unknown_section(self, isolated, tmp_path):
        """Unknown sections are rejected."""
        path = tmp_path / "bad.toml"
        path.write_text("[database]\npath = \"x\"\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            loader().load(defaults_path=path)

    def test_env_prefix(self):
        """The prefix is derived from the app name."""
        assert ConfigLoader(app_name="livephoto-repair").env_prefix == "LIVEPHOTO_REPAIR_"

    def test_shipped_defaults_are_valid(self, isolated):
        """config/defaults.toml in the repository loads cleanly."""
        shipped = Path(__file__).resolve().parents[2] / "config" / "defaults.toml"
        config = loader().load(defaults_path=shipped)
        assert config.matcher.max_video_duration == 4.0
        assert config.builder.image_suffix == "_live"
