"""Tests for runtime configuration."""

import pytest

from kangapp.core.config import KangConfig, get_config, set_config


class TestKangConfig:
    """Test KangConfig defaults and validation."""

    def test_defaults(self):
        """Defaults point at the bundled templates with no timeout."""
        config = KangConfig()
        assert config.templates_dir.name == "templates"
        assert (config.templates_dir / "catalog.yml").exists()
        assert config.process_timeout is None
        assert config.copy_workers == 8
        assert config.marker == "_"

    def test_invalid_workers(self):
        """At least one worker is required."""
        with pytest.raises(ValueError, match="copy_workers"):
            KangConfig(copy_workers=0)

    def test_invalid_marker(self):
        """The marker is a single character."""
        with pytest.raises(ValueError, match="marker"):
            KangConfig(marker="__")


class TestFromEnv:
    """Test reading configuration from the environment."""

    def test_from_env(self, monkeypatch, tmp_path):
        """Environment variables override defaults."""
        monkeypatch.setenv("KANG_TEMPLATES_DIR", str(tmp_path))
        monkeypatch.setenv("KANG_PROCESS_TIMEOUT", "120")
        monkeypatch.setenv("KANG_COPY_WORKERS", "2")
        monkeypatch.setenv("KANG_MARKER", "@")

        config = KangConfig.from_env()

        assert config.templates_dir == tmp_path
        assert config.process_timeout == 120.0
        assert config.copy_workers == 2
        assert config.marker == "@"

    def test_from_env_defaults(self, monkeypatch):
        """Unset variables keep defaults."""
        for var in ("KANG_TEMPLATES_DIR", "KANG_PROCESS_TIMEOUT", "KANG_COPY_WORKERS", "KANG_MARKER"):
            monkeypatch.delenv(var, raising=False)

        config = KangConfig.from_env()

        assert config.process_timeout is None
        assert config.copy_workers == 8


class TestGlobalConfig:
    """Test the global config accessors."""

    def test_set_and_get(self):
        """set_config replaces the global instance."""
        config = KangConfig(copy_workers=3)
        set_config(config)
        assert get_config() is config

    def test_reset_reloads_from_env(self, monkeypatch):
        """Clearing the global config reads the environment again."""
        monkeypatch.setenv("KANG_COPY_WORKERS", "5")
        set_config(None)
        assert get_config().copy_workers == 5
