"""
Configuration management for the Astralis application.

This module loads and validates application configuration using Pydantic
models. Values are resolved from model defaults, an optional JSON file,
environment variables and command line flags, later sources winning.
"""

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from version import __app_display_name__, __version__

logger = logging.getLogger(__name__)

# Environment variable -> config field
ENVIRONMENT_VARIABLES = {
    "ASTRALIS_API_PORT": "api_port",
    "NASA_API_KEY": "nasa_api_key",
    "ASTRALIS_LOG_LEVEL": "log_level",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AstralisConfig(BaseModel):
    """Server, provider and lookup settings."""

    # Server
    api_host: str = Field(default="0.0.0.0", description="Listen host")
    api_port: int = Field(default=8080, ge=1, le=65535, description="Listen port")

    # Third-party APIs
    nasa_api_key: str = Field(
        default="", description="NASA API key, empty disables the DONKI provider"
    )
    timeout_seconds: int = Field(
        default=10, ge=1, le=120, description="Outbound HTTP request timeout"
    )

    # Observer location sent to the visible planets API
    observer_latitude: float = Field(default=32.0, ge=-90, le=90)
    observer_longitude: float = Field(default=-98.0, ge=-180, le=180)

    # Windows scanned when an event is looked up by id
    nasa_lookup_months_back: int = Field(default=1, ge=0)
    nasa_lookup_months_forward: int = Field(default=1, ge=0)
    planets_lookup_days_forward: int = Field(default=7, ge=0)

    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("nasa_api_key")
    @classmethod
    def strip_api_key(cls, v):
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level name."""
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def is_nasa_enabled(self) -> bool:
        """Check if a NASA API key is configured."""
        return self.nasa_api_key != ""

    def to_summary_dict(self) -> dict:
        """Get configuration summary safe for logging."""
        return {
            "listen": f"{self.api_host}:{self.api_port}",
            "nasa_enabled": self.is_nasa_enabled(),
            "timeout_seconds": self.timeout_seconds,
            "observer": f"{self.observer_latitude:g}, {self.observer_longitude:g}",
            "log_level": self.log_level,
        }


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class ConfigManager:
    """
    Resolves the application configuration.

    Handles reading the optional JSON file and layering environment
    variables and explicit overrides on top of it.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to a JSON configuration file, optional
            environ: Environment mapping, defaults to ``os.environ``
        """
        self.config_path = Path(config_path) if config_path else None
        self._environ = os.environ if environ is None else environ
        self.config: Optional[AstralisConfig] = None

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> AstralisConfig:
        """
        Load configuration.

        Args:
            overrides: Highest precedence values, e.g. from command line flags

        Returns:
            AstralisConfig: The resolved configuration

        Raises:
            ConfigurationError: If the file or any value is invalid
        """
        data: Dict[str, Any] = {}
        data.update(self._read_file())
        data.update(self._read_environment())
        if overrides:
            data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            self.config = AstralisConfig(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        logger.debug(f"Configuration loaded: {self.config.to_summary_dict()}")
        return self.config

    def _read_file(self) -> Dict[str, Any]:
        if self.config_path is None:
            return {}
        if not self.config_path.exists():
            logger.warning(f"Config file {self.config_path} not found, using defaults")
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read config file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a JSON object")
        logger.debug(f"Read config file: {self.config_path}")
        return data

    def _read_environment(self) -> Dict[str, Any]:
        return {
            field: self._environ[name]
            for name, field in ENVIRONMENT_VARIABLES.items()
            if self._environ.get(name)
        }


def build_argument_parser() -> argparse.ArgumentParser:
    """Create the API server's command line parser."""
    parser = argparse.ArgumentParser(
        prog="astralis-api", description=f"{__app_display_name__} v{__version__}"
    )
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument("--api_host", help="Astralis API listen host")
    parser.add_argument("--api_port", type=int, help="Astralis API port. Defaults to 8080")
    parser.add_argument("--nasa_api_key", help="NASA API Key")
    parser.add_argument("--log_level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def load_config_from_command_line(
    argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None
) -> AstralisConfig:
    """Parse command line flags and resolve the full configuration."""
    args = build_argument_parser().parse_args(argv)
    overrides = {
        "api_host": args.api_host,
        "api_port": args.api_port,
        "nasa_api_key": args.nasa_api_key,
        "log_level": args.log_level,
    }
    return ConfigManager(args.config, environ=environ).load_config(overrides)
