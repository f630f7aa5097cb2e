"""JSON-based settings persistence for the scroll calendar."""

from __future__ import annotations

import json
import logging
import os

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-scroll-calendar.json")

VIEWS = ("scroll", "paged")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_DEFAULTS = {
    "view": "scroll",
    "window_width": None,
    "window_height": None,
    "holidays": {},
    "log_level": "INFO",
}


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    settings["holidays"] = {}
    path = path or _SETTINGS_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read settings from %s: %s", path, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings in %s: not a JSON object", path)
        return settings

    if stored.get("view") in VIEWS:
        settings["view"] = stored["view"]
    for key in ("window_width", "window_height"):
        value = stored.get(key)
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            settings[key] = value
    if isinstance(stored.get("holidays"), dict):
        settings["holidays"] = {
            k: v for k, v in stored["holidays"].items()
            if isinstance(k, str) and isinstance(v, str)
        }
    level = stored.get("log_level")
    if isinstance(level, str) and level.upper() in LOG_LEVELS:
        settings["log_level"] = level.upper()
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2, ensure_ascii=False)
