"""
Dashboard package for Haole.

Provides the terminal-based live dashboard (Rich) and the simpler watch loop.
"""

from .live_dashboard import StatusDashboard, run_dashboard
from .watch import effective_watch_interval, run_watch

__all__ = ["StatusDashboard", "effective_watch_interval", "run_dashboard", "run_watch"]
