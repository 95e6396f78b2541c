"""
Configuration management for Haole.

Loads configuration from:
- config.yaml in the config directory (all settings)
- .env file in the config directory and the environment (overrides)

The config directory is ``$HAOLE_CONFIG_DIR`` or ``~/.config/haole``.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the directory holding config.yaml and the saved preferences."""
    override = os.getenv("HAOLE_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "haole"


def _load_yaml_config(config_dir: Path) -> dict[str, Any]:
    """Load configuration from config.yaml, returning {} when absent or unreadable."""
    config_path = config_dir / "config.yaml"
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not read {config_path}, using defaults: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring {config_path}: expected a mapping")
        return {}
    return data


class Config(BaseModel):
    """Application configuration."""

    # Target server
    server_host: str = Field(default="play.havenmc.jp")

    # Status APIs
    haven_api_url: str = Field(default="https://api.havenmc.jp/status")
    mcstatus_api_base_url: str = Field(default="https://api.mcstatus.io/v2/status/java")
    request_timeout_seconds: float = Field(default=10.0, gt=0)

    # Dashboard
    refresh_interval: int = Field(default=5, ge=1)
    history_size: int = Field(default=50, ge=1)

    # Self-update (GitHub owner/repo)
    update_repository: str = Field(default="KoHaRxnP/haole")

    # Logging
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @property
    def mcstatus_url(self) -> str:
        """Get the full mcstatus.io URL for the configured server."""
        return f"{self.mcstatus_api_base_url.rstrip('/')}/{self.server_host}"


def load_config(config_dir: Optional[Path] = None) -> Config:
    """Load configuration from config.yaml and .env, falling back to defaults."""
    config_dir = config_dir or get_config_dir()
    load_dotenv(config_dir / ".env")

    yaml_config = _load_yaml_config(config_dir)

    # Environment wins over config.yaml
    env_log_level = os.getenv("HAOLE_LOG_LEVEL")
    if env_log_level:
        yaml_config["log_level"] = env_log_level

    try:
        return Config(**yaml_config)
    except ValidationError as e:
        logger.warning(f"Invalid configuration, using defaults: {e}")
        return Config()


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
