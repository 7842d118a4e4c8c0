# inventory/config.py
# Settings come from environment variables, optionally seeded from a .env file.

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when a configuration value is invalid."""
    pass


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _get_bool_env(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"Environment variable '{key}' must be a boolean, got {raw!r}")


def _get_int_env(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"Environment variable '{key}' must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """Application settings."""
    data_file: str = "inventory.json"
    strict_load: bool = False
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8085


def load_settings() -> Settings:
    """
    Load settings from the environment.

    Reads a .env file first (existing environment variables win), then
    builds a Settings instance.

    Raises:
        ConfigurationError: If a value cannot be parsed.
    """
    load_dotenv()

    log_level = os.environ.get("INVENTORY_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown log level: {log_level}")

    return Settings(
        data_file=os.environ.get("INVENTORY_DATA_FILE", "inventory.json"),
        strict_load=_get_bool_env("INVENTORY_STRICT_LOAD", False),
        log_level=log_level,
        api_host=os.environ.get("INVENTORY_API_HOST", "127.0.0.1"),
        api_port=_get_int_env("INVENTORY_API_PORT", 8085),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached settings, loading them on first access."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
