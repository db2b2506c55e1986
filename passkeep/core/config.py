"""
Configuration helpers for the passkeep backend.

Settings are read from an optional YAML file and then overridden by
environment variables, so routers/services never touch os.environ directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os
from typing import Any, Mapping

import yaml

DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_RECORD_TYPES = ("login",)


class ConfigError(Exception):
    """Raised when the configuration file exists but cannot be used."""


@dataclass(frozen=True)
class Settings:
    """Typed view of the YAML config plus environment overrides."""

    app_env: str
    file_path: str
    server_host: str
    server_port: int
    record_types: tuple[str, ...]
    log_level: str


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _types(value: Any) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_RECORD_TYPES
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ConfigError("record_types must be a list of strings")
    return tuple(str(item).strip() for item in items if str(item).strip())


def _read_yaml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"failed to read config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a mapping")
    return data


def load_settings(path: str | os.PathLike | None = None) -> Settings:
    """Build Settings from ``path`` (or PASSKEEP_CONFIG) and the environment."""
    config_path = Path(path or os.getenv("PASSKEEP_CONFIG") or DEFAULT_CONFIG_PATH)
    raw = _read_yaml(config_path)

    def _get(env_name: str, key: str, default: Any) -> Any:
        env_value = os.getenv(env_name)
        if env_value is not None and env_value.strip():
            return env_value
        value = raw.get(key)
        return default if value is None else value

    return Settings(
        app_env=str(_get("APP_ENV", "app_env", "dev")).lower(),
        file_path=str(_get("FILE_PATH", "file_path", "storage.json")),
        server_host=str(_get("SERVER_HOST", "server_host", "127.0.0.1")),
        server_port=_int(_get("SERVER_PORT", "server_port", 8080), 8080),
        record_types=_types(_get("RECORD_TYPES", "record_types", None)),
        log_level=str(_get("LOG_LEVEL", "log_level", "INFO")).upper(),
    )


@lru_cache
def get_settings() -> Settings:
    """Read the current config file/environment and cache the result."""
    return load_settings()
