"""Theme preference persisted between sessions."""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_DARK_THEME = False


def load_theme_preference(path: Path) -> bool:
    """
    Reads the dark theme flag.

    Args:
        path (Path): Settings file.

    Returns:
        bool: True for the dark theme. Falls back to DEFAULT_DARK_THEME when the
        file is missing or unreadable.
    """
    try:
        with open(path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}
    except FileNotFoundError:
        return DEFAULT_DARK_THEME
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Settings file %s is unreadable (%s); using defaults", path, exc)
        return DEFAULT_DARK_THEME

    if not isinstance(data, dict):
        return DEFAULT_DARK_THEME
    value = data.get("dark", DEFAULT_DARK_THEME)
    if isinstance(value, bool):
        return value
    # accept "true"/"false" strings written by hand
    return str(value).strip().lower() == "true"


def save_theme_preference(path: Path, dark: bool) -> bool:
    """
    Writes the dark theme flag.

    Returns:
        bool: True if saved. A failed write only loses the preference, so it is logged.
    """
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as file:
            yaml.safe_dump({"dark": bool(dark)}, file, sort_keys=False)
    except OSError as exc:
        logger.warning("Failed to save settings to %s: %s", path, exc)
        return False
    return True
