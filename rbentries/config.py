"""Persistent JSON config helpers.

Stores CLI listing preferences and the log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "rbentries"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_bool(key: str, default: bool) -> bool:
    """Return a boolean config value; non-boolean values fall back to ``default``."""
    value = load_config().get(key)
    return value if isinstance(value, bool) else default


def _save_bool(key: str, value: bool) -> None:
    config = load_config()
    config[key] = bool(value)
    save_config(config)


def load_sort() -> bool:
    """Return whether CLI listings are sorted by name."""
    return _load_bool("sort", False)


def save_sort(sort: bool) -> None:
    _save_bool("sort", sort)


def load_skip_empty_dirs() -> bool:
    """Return whether tree output drops directories without ``.rb`` files."""
    return _load_bool("skip_empty_dirs", True)


def save_skip_empty_dirs(skip_empty_dirs: bool) -> None:
    _save_bool("skip_empty_dirs", skip_empty_dirs)


def load_log_level() -> int:
    """Load the configured log level as a ``logging`` constant.

    Level names are matched case-insensitively; unknown names fall back to
    ``WARNING``.
    """
    value = load_config().get("log_level")
    name = value.strip().upper() if isinstance(value, str) else DEFAULT_LOG_LEVEL
    if name not in LOG_LEVEL_NAMES:
        name = DEFAULT_LOG_LEVEL
    return logging.getLevelName(name)


def save_log_level(level_name: str) -> None:
    """Persist a log level name; unknown names are not written."""
    name = str(level_name).strip().upper()
    if name not in LOG_LEVEL_NAMES:
        return
    config = load_config()
    config["log_level"] = name
    save_config(config)
