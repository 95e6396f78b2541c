"""
Persisted display-mode preference.

The preference decides what a bare ``haole`` invocation does: print help
(``cli``) or open the live dashboard (``tui``). It is stored as a single
key in ``preferences.yaml`` inside the config directory.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ValidationError

from ..config import get_config_dir
from ..logging_config import get_logger

logger = get_logger(__name__)

PREFERENCES_FILENAME = "preferences.yaml"


class PreferenceError(Exception):
    """Raised when a preference value is invalid or cannot be saved."""


class Mode(str, Enum):
    CLI = "cli"
    TUI = "tui"

    def toggled(self) -> "Mode":
        return Mode.TUI if self is Mode.CLI else Mode.CLI


class ModePreference(BaseModel):
    mode: Mode = Mode.CLI


def get_preferences_path(config_dir: Optional[Path] = None) -> Path:
    return (config_dir or get_config_dir()) / PREFERENCES_FILENAME


def load_preference(path: Optional[Path] = None) -> ModePreference:
    """
    Load the saved preference.

    Missing files yield the default silently; unreadable or invalid files
    yield the default with a warning.
    """
    path = path or get_preferences_path()
    if not path.exists():
        return ModePreference()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return ModePreference(**data)
    except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
        logger.warning(f"Could not load preferences from {path}, defaulting to cli: {e}")
        return ModePreference()


def save_preference(preference: ModePreference, path: Optional[Path] = None) -> None:
    """
    Write the preference to disk.

    Raises:
        PreferenceError: If the file cannot be written.
    """
    path = path or get_preferences_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"mode": preference.mode.value}, f)
    except OSError as e:
        raise PreferenceError(f"Could not save preferences to {path}: {e}") from e

    logger.debug(f"Saved mode={preference.mode.value} to {path}")


def parse_mode(value: str) -> Mode:
    """
    Parse a user-supplied mode name (case-insensitive).

    Raises:
        PreferenceError: If the value is not a known mode.
    """
    try:
        return Mode(value.strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in Mode)
        raise PreferenceError(f"Invalid mode '{value}'. Choose one of: {choices}, toggle") from None


def change_mode(requested: str, path: Optional[Path] = None) -> Mode:
    """
    Set the mode to ``requested`` or flip it when ``requested`` is "toggle".

    The file is left untouched when ``requested`` is invalid.

    Returns:
        The newly saved mode.
    """
    current = load_preference(path)
    if requested.strip().lower() == "toggle":
        new_mode = current.mode.toggled()
    else:
        new_mode = parse_mode(requested)

    save_preference(ModePreference(mode=new_mode), path)
    return new_mode
