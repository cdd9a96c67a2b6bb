"""JSON-based settings persistence for the scroll calendar."""

import json
import os

from date_range import ConfigurationError, validate_span

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".scroll-calendar-settings.json")

_DEFAULTS = {
    "year_span": 1,
    "show_lunar": True,
    "visible_months": 3,
    "window_width": None,
    "window_height": None,
    "verbose": False,
    "log_json": False,
}


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys.

    Window and logging keys of the wrong type are ignored. A stored
    ``year_span`` that is not a non-negative int, or a ``visible_months``
    below 1, raises ConfigurationError.
    """
    settings = dict(_DEFAULTS)
    try:
        with open(path or _SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return settings
    if not isinstance(stored, dict):
        return settings

    for key in ("show_lunar", "verbose", "log_json"):
        if key in stored and isinstance(stored[key], bool):
            settings[key] = stored[key]
    for key in ("visible_months", "window_width", "window_height"):
        if key in stored and isinstance(stored[key], int) and not isinstance(stored[key], bool):
            settings[key] = stored[key]
    if "year_span" in stored:
        settings["year_span"] = validate_span(stored["year_span"])

    if settings["visible_months"] < 1:
        raise ConfigurationError(
            f"visible_months must be at least 1, got {settings['visible_months']}")
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
