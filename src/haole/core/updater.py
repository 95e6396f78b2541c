"""
Self-update against GitHub releases.

Looks up the latest release of the configured repository and, when it is
newer than the running version, reinstalls haole from that tag with pip.
"""

import re
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional

import httpx

from .. import __version__
from ..config import Config, get_config
from ..logging_config import get_logger

logger = get_logger(__name__)

GITHUB_API_BASE_URL = "https://api.github.com"


class UpdateError(Exception):
    """Raised when the release check or the install fails."""


@dataclass
class ReleaseInfo:
    """The latest published release."""
    tag: str
    url: Optional[str] = None

    @property
    def version(self) -> str:
        return self.tag.lstrip("vV")


def parse_version(value: str) -> tuple[int, ...]:
    """
    Parse a dotted version into a comparable tuple.

    Non-numeric suffixes on a component are ignored ("1.2.0rc1" -> (1, 2, 0)).
    """
    parts = []
    for piece in value.strip().lstrip("vV").split("."):
        match = re.match(r"\d+", piece)
        if not match:
            break
        parts.append(int(match.group()))
    if not parts:
        raise ValueError(f"Not a version: {value!r}")

    # 1.2 == 1.2.0
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def is_newer(candidate: str, current: str = __version__) -> bool:
    return parse_version(candidate) > parse_version(current)


class Updater:
    """Checks for and installs newer releases."""

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.BaseTransport] = None,
        current_version: str = __version__,
    ):
        self.config = config or get_config()
        self.current_version = current_version
        self._transport = transport

    @property
    def repository(self) -> str:
        return self.config.update_repository.strip("/")

    def fetch_latest_release(self) -> ReleaseInfo:
        """
        Fetch the latest release.

        GET /repos/<owner>/<repo>/releases/latest
        """
        url = f"{GITHUB_API_BASE_URL}/repos/{self.repository}/releases/latest"
        logger.debug(f"Checking for updates: {url}")

        try:
            with httpx.Client(
                headers={
                    "Accept": "application/vnd.github+json",
                    "User-Agent": f"haole/{__version__}",
                },
                timeout=self.config.request_timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise UpdateError(f"Release check failed: HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise UpdateError(f"Release check failed: {e}") from e
        except ValueError as e:
            raise UpdateError("Release check returned invalid JSON") from e

        tag = data.get("tag_name") if isinstance(data, dict) else None
        if not tag:
            raise UpdateError("Latest release has no tag")

        return ReleaseInfo(tag=tag, url=data.get("html_url"))

    def check(self) -> Optional[ReleaseInfo]:
        """Get the latest release if it is newer than the running version, else None."""
        release = self.fetch_latest_release()
        try:
            newer = is_newer(release.version, self.current_version)
        except ValueError as e:
            raise UpdateError(f"Cannot compare versions: {e}") from e
        return release if newer else None

    def install_command(self, release: ReleaseInfo) -> list[str]:
        return [
            sys.executable, "-m", "pip", "install", "--upgrade",
            f"git+https://github.com/{self.repository}.git@{release.tag}",
        ]

    def install(self, release: ReleaseInfo) -> None:
        """
        Install the given release with pip.

        Raises:
            UpdateError: If pip cannot be started or exits non-zero.
        """
        command = self.install_command(release)
        logger.info(f"Installing haole {release.version}")

        try:
            result = subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise UpdateError(f"Could not run pip: {e}") from e

        if result.returncode != 0:
            output = (result.stderr or result.stdout).strip()
            raise UpdateError(f"pip exited with code {result.returncode}: {output[-500:]}")
