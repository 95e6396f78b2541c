"""
Non-blocking keyboard input for the dashboard and watch loops.

``KeyReader`` puts the terminal in cbreak mode for the duration of a
``with`` block, so single key presses are readable without Enter, and
always restores the saved terminal settings on exit.
"""

import os
import sys
import time
from typing import Optional, TextIO

if os.name == "nt":
    import msvcrt
else:
    import select
    import termios
    import tty

QUIT_KEYS = frozenset({"q", "Q"})


class KeyReader:
    """Scoped cbreak-mode terminal input with timed key polling."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdin
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[list] = None

    @property
    def interactive(self) -> bool:
        try:
            return self.stream.isatty()
        except (AttributeError, ValueError):
            return False

    def __enter__(self) -> "KeyReader":
        if os.name != "nt" and self.interactive:
            self._fd = self.stream.fileno()
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, *args) -> None:
        self.restore()

    def restore(self) -> None:
        """Restore the terminal settings saved on entry (idempotent)."""
        if self._fd is not None and self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
        self._fd = None
        self._saved_attrs = None

    def read_key(self, timeout: float) -> Optional[str]:
        """
        Wait up to ``timeout`` seconds for a key press.

        Returns:
            The key pressed, or None if the timeout elapsed first.
        """
        timeout = max(0.0, timeout)

        if not self.interactive:
            time.sleep(timeout)
            return None

        if os.name == "nt":
            deadline = time.monotonic() + timeout
            while True:
                if msvcrt.kbhit():
                    return msvcrt.getwch()
                if time.monotonic() >= deadline:
                    return None
                time.sleep(0.05)

        ready, _, _ = select.select([self.stream], [], [], timeout)
        if not ready:
            return None
        key = self.stream.read(1)
        return key or None


def is_quit_key(key: Optional[str]) -> bool:
    return key in QUIT_KEYS
