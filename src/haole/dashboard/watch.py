"""
Watch mode: rerun a one-shot command on an interval until q is pressed.
"""

import time
from datetime import datetime
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from ..clients import StatusFetchError
from ..logging_config import get_logger
from .keyboard import KeyReader, is_quit_key

logger = get_logger(__name__)

DEFAULT_WATCH_INTERVAL = 5
MIN_WATCH_INTERVAL = 2


def effective_watch_interval(requested: Optional[int]) -> int:
    """Clamp a requested interval; unspecified means the default."""
    if requested is None:
        return DEFAULT_WATCH_INTERVAL
    return max(requested, MIN_WATCH_INTERVAL)


def run_watch(
    render: Callable[[], list[str]],
    interval: Optional[int] = None,
    console: Optional[Console] = None,
    key_reader_factory: Callable[[], KeyReader] = KeyReader,
    max_iterations: Optional[int] = None,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """
    Clear the screen, print ``render()``, wait, repeat.

    Fetch errors are printed for that iteration and the loop carries on.

    Args:
        render: Produces the command's output lines (Rich markup).
        interval: Requested seconds between runs (clamped, see effective_watch_interval).
        console: Console to draw on.
        key_reader_factory: Builds the scoped key reader.
        max_iterations: Stop after this many runs (None = until quit).
        clock: Monotonic time source.

    Returns:
        Number of iterations run.
    """
    interval = effective_watch_interval(interval)
    console = console or Console()
    iterations = 0

    with key_reader_factory() as keys:
        try:
            while max_iterations is None or iterations < max_iterations:
                iterations += 1
                console.clear()
                try:
                    for line in render():
                        console.print(line)
                except StatusFetchError as e:
                    logger.debug(f"Watch fetch failed: {e}")
                    console.print(f"[bold red]✗ Failed to fetch server status: {escape(str(e))}[/bold red]")

                console.print(
                    f"\n[dim]Updated {datetime.now().strftime('%H:%M:%S')} · "
                    f"every {interval}s · press q to quit[/dim]"
                )

                if _wait_for_quit(keys, interval, clock):
                    break
        except KeyboardInterrupt:
            pass

    return iterations


def _wait_for_quit(keys: KeyReader, interval: float, clock: Callable[[], float]) -> bool:
    """
    Wait out the full interval, returning early only for a quit key.

    Other keys are consumed and the wait resumes for the remaining time.
    """
    deadline = clock() + interval
    while True:
        remaining = deadline - clock()
        if remaining <= 0:
            return False
        if is_quit_key(keys.read_key(remaining)):
            return True
