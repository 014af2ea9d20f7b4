"""
Unit tests for configuration loading and caching.
"""

import tomllib

import pytest

from makeitrun.config import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_toml_file,
    resolve_config_path,
    set_config_path,
)
from makeitrun.config import manager
from makeitrun.models import AppConfig
from makeitrun.validation import ValidationError


@pytest.mark.unit
class TestConfigManager:
    """Test cases for the cached configuration manager."""

    def test_missing_default_file_uses_builtin_defaults(self):
        assert get_config() == AppConfig()

    def test_explicit_file_is_loaded(self, config_file):
        set_config_path(config_file)

        config = get_config()

        assert config.defaults.count == 2
        assert config.spawn.shell is True

    def test_explicit_missing_file_is_an_error(self, temp_dir):
        set_config_path(temp_dir / "nope.toml")

        with pytest.raises(FileNotFoundError):
            get_config()

    def test_environment_variable_names_required_file(self, monkeypatch, config_file, temp_dir):
        monkeypatch.setenv(manager.CONFIG_ENV_VAR, str(config_file))
        assert get_config().defaults.kill is True

        clear_config_cache()
        monkeypatch.setenv(manager.CONFIG_ENV_VAR, str(temp_dir / "missing.toml"))
        with pytest.raises(FileNotFoundError):
            get_config()

    def test_explicit_path_wins_over_environment(self, monkeypatch, config_file, temp_dir):
        monkeypatch.setenv(manager.CONFIG_ENV_VAR, str(temp_dir / "missing.toml"))
        set_config_path(config_file)

        path, required = resolve_config_path()

        assert path == config_file
        assert required is True

    def test_config_is_cached(self, config_file):
        set_config_path(config_file)
        first = get_config()

        config_file.write_text("[defaults]\ncount = 5\n")

        assert get_config() is first
        clear_config_cache()
        assert get_config().defaults.count == 5

    def test_default_file_is_read_when_present(self, temp_dir, monkeypatch):
        default_path = temp_dir / "config.toml"
        default_path.write_text("[defaults]\ncount = 4\n")
        monkeypatch.setattr(manager, "DEFAULT_CONFIG_FILE_PATH", default_path)

        assert get_config().defaults.count == 4

    def test_invalid_values_raise_validation_error(self, temp_dir):
        path = temp_dir / "bad.toml"
        path.write_text("[defaults]\ncount = -3\n")
        set_config_path(path)

        with pytest.raises(ValidationError):
            get_config()

    def test_config_info(self, config_file):
        assert is_config_loaded() is False
        set_config_path(config_file)
        get_config()

        info = get_config_info()

        assert info["config_loaded"] is True
        assert info["config_path"] == str(config_file)


@pytest.mark.unit
def test_load_toml_file_rejects_malformed_toml(temp_dir):
    path = temp_dir / "broken.toml"
    path.write_text("[defaults\ncount = 1\n")

    with pytest.raises(tomllib.TOMLDecodeError):
        load_toml_file(path)


@pytest.mark.unit
def test_explicit_directory_path_raises_os_error(temp_dir):
    set_config_path(temp_dir)

    with pytest.raises(IsADirectoryError):
        get_config()
    assert not is_config_loaded()
