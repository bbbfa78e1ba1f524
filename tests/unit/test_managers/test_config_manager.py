"""
Tests for configuration loading and validation.
"""

import json
import pytest

from astralis.managers.config_manager import (
    AstralisConfig,
    ConfigManager,
    ConfigurationError,
    build_argument_parser,
    load_config_from_command_line,
)


@pytest.fixture
def config_file(tmp_path):
    """Write a JSON config file and return its path."""

    def _write(content):
        path = tmp_path / "astralis.json"
        path.write_text(content if isinstance(content, str) else json.dumps(content))
        return str(path)

    return _write


class TestAstralisConfig:
    """Test AstralisConfig model."""

    def test_defaults(self):
        config = AstralisConfig()

        assert config.api_host == "0.0.0.0"
        assert config.api_port == 8080
        assert config.nasa_api_key == ""
        assert config.timeout_seconds == 10
        assert config.observer_latitude == 32.0
        assert config.observer_longitude == -98.0
        assert config.nasa_lookup_months_back == 1
        assert config.nasa_lookup_months_forward == 1
        assert config.planets_lookup_days_forward == 7
        assert config.log_level == "INFO"

    def test_nasa_disabled_without_key(self):
        assert not AstralisConfig().is_nasa_enabled()

    def test_nasa_enabled_with_key(self):
        assert AstralisConfig(nasa_api_key="DEMO_KEY").is_nasa_enabled()

    def test_blank_key_disables_nasa(self):
        config = AstralisConfig(nasa_api_key="   ")
        assert config.nasa_api_key == ""
        assert not config.is_nasa_enabled()

    def test_log_level_is_normalized(self):
        assert AstralisConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="log_level"):
            AstralisConfig(log_level="LOUD")

    @pytest.mark.parametrize("port", [0, 70000])
    def test_invalid_port(self, port):
        with pytest.raises(ValueError):
            AstralisConfig(api_port=port)

    def test_invalid_latitude(self):
        with pytest.raises(ValueError):
            AstralisConfig(observer_latitude=91)

    def test_summary_hides_api_key(self):
        summary = AstralisConfig(nasa_api_key="secret").to_summary_dict()

        assert "secret" not in str(summary)
        assert summary["nasa_enabled"] is True
        assert summary["listen"] == "0.0.0.0:8080"
        assert summary["observer"] == "32, -98"


class TestConfigManager:
    """Test ConfigManager layering."""

    def test_defaults_without_sources(self):
        config = ConfigManager(environ={}).load_config()
        assert config == AstralisConfig()

    def test_file_values(self, config_file):
        path = config_file({"api_port": 9000, "observer_latitude": 51.5})

        config = ConfigManager(path, environ={}).load_config()

        assert config.api_port == 9000
        assert config.observer_latitude == 51.5

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = ConfigManager(str(tmp_path / "missing.json"), environ={})
        assert manager.load_config().api_port == 8080

    def test_invalid_json(self, config_file):
        path = config_file("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            ConfigManager(path, environ={}).load_config()

    def test_non_object_file(self, config_file):
        path = config_file([1, 2])
        with pytest.raises(ConfigurationError, match="JSON object"):
            ConfigManager(path, environ={}).load_config()

    def test_invalid_value_in_file(self, config_file):
        path = config_file({"api_port": "not a port"})
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigManager(path, environ={}).load_config()

    def test_environment_values(self):
        environ = {
            "ASTRALIS_API_PORT": "9090",
            "NASA_API_KEY": "DEMO_KEY",
            "ASTRALIS_LOG_LEVEL": "warning",
        }

        config = ConfigManager(environ=environ).load_config()

        assert config.api_port == 9090
        assert config.nasa_api_key == "DEMO_KEY"
        assert config.log_level == "WARNING"

    def test_empty_environment_values_are_ignored(self):
        config = ConfigManager(environ={"ASTRALIS_API_PORT": ""}).load_config()
        assert config.api_port == 8080

    def test_environment_overrides_file(self, config_file):
        path = config_file({"api_port": 9000, "nasa_api_key": "from-file"})

        config = ConfigManager(path, environ={"NASA_API_KEY": "from-env"}).load_config()

        assert config.api_port == 9000
        assert config.nasa_api_key == "from-env"

    def test_overrides_win(self, config_file):
        path = config_file({"api_port": 9000})
        manager = ConfigManager(path, environ={"ASTRALIS_API_PORT": "9090"})

        config = manager.load_config({"api_port": 7000, "api_host": None})

        assert config.api_port == 7000
        assert config.api_host == "0.0.0.0"

    def test_loaded_config_is_kept(self):
        manager = ConfigManager(environ={})
        config = manager.load_config()
        assert manager.config is config


class TestCommandLine:
    """Test command line parsing."""

    def test_parser_flags(self):
        args = build_argument_parser().parse_args(
            ["--api_host", "127.0.0.1", "--api_port", "8181", "--nasa_api_key", "k"]
        )

        assert args.api_host == "127.0.0.1"
        assert args.api_port == 8181
        assert args.nasa_api_key == "k"
        assert args.config is None

    def test_flags_override_environment(self):
        config = load_config_from_command_line(
            ["--api_port", "8181", "--log_level", "DEBUG"],
            environ={"ASTRALIS_API_PORT": "9090", "NASA_API_KEY": "env-key"},
        )

        assert config.api_port == 8181
        assert config.log_level == "DEBUG"
        assert config.nasa_api_key == "env-key"

    def test_config_flag(self, config_file):
        path = config_file({"timeout_seconds": 30})

        config = load_config_from_command_line(["--config", path], environ={})

        assert config.timeout_seconds == 30

    def test_no_flags(self):
        assert load_config_from_command_line([], environ={}) == AstralisConfig()
