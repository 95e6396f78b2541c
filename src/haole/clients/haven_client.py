"""
HavenMC status API client.

Wraps https://api.havenmc.jp/status, the primary source for online state,
player counts, player names and the server version.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..logging_config import get_logger
from .base import JSONStatusClient, StatusFetchError

logger = get_logger(__name__)


@dataclass(frozen=True)
class ServerStatus:
    """Snapshot of the server as reported by the HavenMC API."""
    online: bool
    players_online: int
    players_max: int
    server_version: str
    player_names: Optional[tuple[str, ...]] = None  # None when the server hides names


class HavenStatusClient(JSONStatusClient):
    """Client for the HavenMC status endpoint."""

    source_name = "HavenMC status API"

    def fetch(self) -> ServerStatus:
        """
        Fetch the current server status.

        GET https://api.havenmc.jp/status

        Returns:
            A fresh ServerStatus.

        Raises:
            StatusFetchError: If the API is unreachable or the payload is malformed.
        """
        data = self._get_json(self.config.haven_api_url)
        status = self._parse_status(data)
        logger.debug(
            f"Server {'online' if status.online else 'offline'}, "
            f"{status.players_online}/{status.players_max} players"
        )
        return status

    def _parse_status(self, data: dict[str, Any]) -> ServerStatus:
        """
        Parse the status response.

        Args:
            data: Raw API response.

        Returns:
            ServerStatus built from the response.
        """
        try:
            players = data["players"]
            raw_list = players.get("list")
            names = None
            if raw_list is not None:
                if not isinstance(raw_list, list):
                    raise TypeError(f"players.list is {type(raw_list).__name__}, expected list")
                names = tuple(str(name) for name in raw_list)

            return ServerStatus(
                online=bool(data["online"]),
                players_online=int(players["online"]),
                players_max=int(players["max"]),
                server_version=str(data["version"]),
                player_names=names,
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise StatusFetchError(f"malformed response from {self.source_name}: {e!r}") from e
