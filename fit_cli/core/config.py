"""Configuration loading and path resolution."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from fit_cli.core.constants import (
    AI_BASE_URL,
    AI_MAX_TOKENS,
    AI_MODEL,
    AI_TEMPERATURE,
    CHAT_HISTORY_LIMIT,
    DEFAULT_WEEKLY_GOAL,
    RECOVERY_MIN_REFRESH_SECONDS,
    RECOVERY_SUMMARY_LIMIT,
)


class ConfigError(RuntimeError):
    """Raised when the config file cannot be parsed into a table."""


def _deep_merge(defaults: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay user settings on defaults, section by section, without mutating either."""
    result = copy.deepcopy(defaults)
    for key, value in user.items():
        current = result.get(key)
        result[key] = _deep_merge(current, value) if isinstance(value, dict) and isinstance(current, dict) else value
    return result


def expand_path(raw: str) -> Path:
    """`~` and `$VARS` expanded, made absolute."""
    return Path(os.path.expandvars(raw)).expanduser().resolve()


def default_data_dir() -> Path:
    """Where the workout store and recommendation cache live by default."""
    return expand_path(os.getenv("FIT_DATA_DIR", "~/.local/share/fit"))


def default_config_path() -> Path:
    return expand_path(os.getenv("FIT_CONFIG_FILE", "~/.config/fit/config.toml"))


def _default_config() -> Dict[str, Any]:
    data_dir = default_data_dir()
    return {
        "store": {
            "path": str(data_dir / "workouts.json"),
        },
        "defaults": {
            "owner_id": None,
            "weekly_goal": DEFAULT_WEEKLY_GOAL,
        },
        "ai": {
            "enabled": True,
            "base_url": AI_BASE_URL,
            "model": AI_MODEL,
            "api_key_env": "OPENAI_API_KEY",
            "temperature": AI_TEMPERATURE,
            "max_tokens": AI_MAX_TOKENS,
            "timeout_seconds": 30,
        },
        "recovery": {
            "summary_limit": RECOVERY_SUMMARY_LIMIT,
            "min_refresh_seconds": RECOVERY_MIN_REFRESH_SECONDS,
        },
        "chat": {
            "history_limit": CHAT_HISTORY_LIMIT,
        },
        "cache": {
            "enabled": True,
            "directory": str(data_dir / "cache"),
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    is_toml = path.suffix.lower() in {".toml", ""}
    text = path.read_text()
    try:
        loaded = tomllib.loads(text) if is_toml else json.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Defaults overlaid with the config file, if one exists. A missing file is not an error."""
    cfg_path = path or default_config_path()
    if not cfg_path.exists():
        return _default_config()
    return _deep_merge(_default_config(), _read_config(cfg_path))


def resolve_store_path(config: Dict[str, Any], explicit: Optional[Path] = None) -> Path:
    """Resolve workout store file with CLI override first."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("FIT_STORE_FILE") or config.get("store", {}).get("path")
    if not raw:
        raw = str(default_data_dir() / "workouts.json")
    return expand_path(raw)


def resolve_cache_dir(config: Dict[str, Any]) -> Optional[Path]:
    """Resolve recommendation cache directory, or None when caching is off."""
    cache_cfg = config.get("cache", {})
    if not cache_cfg.get("enabled", True):
        return None
    raw = cache_cfg.get("directory") or str(default_data_dir() / "cache")
    return expand_path(raw)


def resolve_api_key(config: Dict[str, Any]) -> Optional[str]:
    """Read the AI credential from the environment, falling back to config.

    Looked up on every call so a key exported after startup is honoured.
    """
    ai_cfg = config.get("ai", {})
    env_name = str(ai_cfg.get("api_key_env") or "OPENAI_API_KEY")
    key = os.getenv(env_name) or ai_cfg.get("api_key")
    if not key or not str(key).strip():
        return None
    return str(key).strip()
