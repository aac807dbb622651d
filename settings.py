"""Picker options: defaults, validation and JSON persistence."""

import json
import logging
import os
from datetime import date, datetime

from selection import Mode

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".date-picker-settings.json")

_DEFAULTS = {
    "mode": Mode.SINGLE.value,
    "initial_date": None,
    "start_date": None,
    "end_date": None,
    "min_date": None,
    "max_date": None,
    "date_string_format": "yyyy-mm-dd",
    "choose_year_first": False,
    "first_weekday": 6,
    "follow_delay_ms": 300,
    "navigation_cooldown_ms": 300,
}

_SEED_KEYS = ("initial_date", "start_date", "end_date")
_DATE_KEYS = ("initial_date", "start_date", "end_date", "min_date", "max_date")
_INT_KEYS = ("first_weekday", "follow_delay_ms", "navigation_cooldown_ms")


def default_options() -> dict:
    return dict(_DEFAULTS)


def normalize_options(options: dict) -> dict:
    """Merge ``options`` over the defaults, dropping invalid values.

    Unknown keys and values of the wrong type are ignored with a warning.

    Raises:
        ValueError: If ``mode`` is not one of single, range or multi.
    """
    settings = default_options()
    for key, value in options.items():
        if key not in _DEFAULTS:
            logger.warning("Ignoring unknown option %r", key)
        elif key == "mode":
            settings["mode"] = Mode(value).value
        elif key in _DATE_KEYS:
            if isinstance(value, datetime) and key in _SEED_KEYS:
                settings[key] = value.date()
            elif value is None or isinstance(value, date):
                settings[key] = value
            else:
                logger.warning("Ignoring %s=%r: not a date", key, value)
        elif key in _INT_KEYS:
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                settings[key] = value
            else:
                logger.warning("Ignoring %s=%r: not a non-negative int", key, value)
        elif key == "choose_year_first":
            if isinstance(value, bool):
                settings[key] = value
            else:
                logger.warning("Ignoring %s=%r: not a bool", key, value)
        elif key == "date_string_format":
            if isinstance(value, str) and value:
                settings[key] = value
            else:
                logger.warning("Ignoring %s=%r: not a pattern string", key, value)
    if settings["first_weekday"] > 6:
        logger.warning("Ignoring first_weekday=%r", settings["first_weekday"])
        settings["first_weekday"] = _DEFAULTS["first_weekday"]
    return settings


def load_options(path: str | None = None) -> dict:
    """Load options from disk, returning defaults for missing or invalid keys."""
    stored: dict = {}
    try:
        with open(path or _SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        pass
    if not isinstance(stored, dict):
        return default_options()
    for key in _DATE_KEYS:
        if isinstance(stored.get(key), str):
            try:
                # Bounds may carry a time of day
                parse = datetime.fromisoformat if "T" in stored[key] else date.fromisoformat
                stored[key] = parse(stored[key])
            except ValueError:
                logger.warning("Ignoring %s=%r: not an ISO date", key, stored[key])
                del stored[key]
    if stored.get("mode") not in (None, *(m.value for m in Mode)):
        logger.warning("Ignoring mode=%r", stored["mode"])
        del stored["mode"]
    return normalize_options(stored)


def save_options(options: dict, path: str | None = None) -> None:
    """Persist options to disk."""
    serializable = {
        key: value.isoformat() if isinstance(value, date) else value
        for key, value in normalize_options(options).items()
    }
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(serializable, f, indent=2)
