"""
Core logic for Haole.

Contains output formatting, the dashboard history buffer, the mode
preference store, self-update and ping helpers.
"""

from .history import HistoryBuffer, HistorySample, sparkline
from .preferences import Mode, ModePreference, PreferenceError, change_mode, load_preference

__all__ = [
    "HistoryBuffer",
    "HistorySample",
    "Mode",
    "ModePreference",
    "PreferenceError",
    "change_mode",
    "load_preference",
    "sparkline",
]
