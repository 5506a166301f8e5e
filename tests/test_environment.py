"""
Tests for host environment loading and envbind settings.
"""

import os

import pytest

from envbind.config import EnvBindSettings, get_config, reload_config
from envbind.environment import load_environment


@pytest.fixture
def dotenv_file(tmp_path):
    """A dotenv file with a shared key, a new key and a key without a value."""
    path = tmp_path / ".env"
    path.write_text("SHARED_KEY=from_file\nFILE_ONLY=file_value\nNO_VALUE\n", encoding="utf-8")
    return path


@pytest.fixture
def clean_env(monkeypatch):
    """Process environment with a known shared key and no file-only keys."""
    monkeypatch.setenv("SHARED_KEY", "from_process")
    monkeypatch.delenv("FILE_ONLY", raising=False)
    monkeypatch.delenv("NO_VALUE", raising=False)
    for key in ("ENVBIND_ENV_FILE", "ENVBIND_ENV_FILE_OVERRIDE", "ENVBIND_ENV_FILE_ENCODING"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestLoadEnvironment:
    """Test environment snapshots."""

    def test_snapshot_of_process_environment(self, clean_env):
        """Test the process environment is copied."""
        environ = load_environment()

        assert environ["SHARED_KEY"] == "from_process"
        assert environ is not os.environ

    def test_snapshot_is_independent(self, clean_env):
        """Test changing the snapshot leaves the process environment alone."""
        environ = load_environment()
        environ["SHARED_KEY"] = "changed"

        assert os.environ["SHARED_KEY"] == "from_process"

    def test_dotenv_layers_new_keys(self, clean_env, dotenv_file):
        """Test dotenv keys are added without overriding process values."""
        environ = load_environment(dotenv_file)

        assert environ["FILE_ONLY"] == "file_value"
        assert environ["SHARED_KEY"] == "from_process"
        assert "NO_VALUE" not in environ
        assert "FILE_ONLY" not in os.environ

    def test_dotenv_override(self, clean_env, dotenv_file):
        """Test override=True lets dotenv values win."""
        environ = load_environment(dotenv_file, override=True)

        assert environ["SHARED_KEY"] == "from_file"

    def test_missing_dotenv_file(self, clean_env, tmp_path):
        """Test a configured file that does not exist raises."""
        with pytest.raises(FileNotFoundError):
            load_environment(tmp_path / "missing.env")


class TestSettings:
    """Test envbind's own settings."""

    def test_defaults(self, clean_env):
        """Test default settings values."""
        settings = EnvBindSettings()

        assert settings.env_file is None
        assert settings.env_file_encoding == "utf-8"
        assert settings.env_file_override is False

    def test_get_config_is_cached(self, clean_env):
        """Test get_config returns the same instance until reloaded."""
        first = get_config()

        assert get_config() is first
        assert reload_config() is not first

    def test_settings_drive_load_environment(self, clean_env, dotenv_file):
        """Test ENVBIND_* variables select and override the dotenv file."""
        clean_env.setenv("ENVBIND_ENV_FILE", str(dotenv_file))
        clean_env.setenv("ENVBIND_ENV_FILE_OVERRIDE", "true")
        reload_config()

        environ = load_environment()

        assert environ["FILE_ONLY"] == "file_value"
        assert environ["SHARED_KEY"] == "from_file"
