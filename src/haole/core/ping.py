"""
Experimental: ping the server with the operating system's ping utility.
"""

import platform
import subprocess
from dataclasses import dataclass
from typing import Optional

DEFAULT_PING_COUNT = 4


@dataclass
class PingResult:
    """Outcome of one ping run; output is relayed as-is."""
    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None  # Set when ping could not be started

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0


def build_ping_command(host: str, count: int = DEFAULT_PING_COUNT, system: Optional[str] = None) -> list[str]:
    system = (system or platform.system()).lower()
    if system == "windows":
        return ["ping", "-n", str(count), host]
    return ["ping", "-c", str(count), host]


def run_ping(host: str, count: int = DEFAULT_PING_COUNT) -> PingResult:
    command = build_ping_command(host, count)
    try:
        proc = subprocess.run(command, capture_output=True, text=True, errors="replace")
    except FileNotFoundError:
        return PingResult(command, -1, error="ping command not found")
    except OSError as e:
        return PingResult(command, -1, error=str(e))

    return PingResult(command, proc.returncode, proc.stdout or "", proc.stderr or "")
