from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path.home() / ".ivly_config.yaml"
DEFAULT_DATA_DIR = Path.home() / ".ivly"


def _load_config() -> Dict[str, Any]:
    if not USER_CONFIG_PATH.exists():
        return {}
    try:
        data = yaml.safe_load(USER_CONFIG_PATH.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _setting(env_name: str, key: str) -> str:
    value = os.environ.get(env_name, "").strip()
    if value:
        return value
    return str(_load_config().get(key, "") or "").strip()


def get_data_dir() -> Path:
    """Storage directory: $IVLY_DIR, then the ``dir`` config key, then ~/.ivly."""
    value = _setting("IVLY_DIR", "dir")
    return Path(value).expanduser() if value else DEFAULT_DATA_DIR


def get_user_theme() -> str:
    return _setting("IVLY_THEME", "theme")


def get_log_level() -> str:
    return _setting("IVLY_LOG_LEVEL", "log_level")
