"""
mcstatus.io API client.

Secondary source for connection details (host, IP, port, protocol) and the
MOTD in its raw, clean and HTML encodings.
"""

from dataclasses import dataclass
from typing import Any

from ..logging_config import get_logger
from .base import JSONStatusClient, StatusFetchError

logger = get_logger(__name__)


@dataclass(frozen=True)
class ServerDetails:
    """Connection details and MOTD as reported by mcstatus.io."""
    host: str
    ip_address: str
    port: int
    protocol: int
    motd_raw: str
    motd_clean: str
    motd_html: str

    def motd(self, encoding: str = "clean") -> str:
        """Get the MOTD in the given encoding (raw, clean or html)."""
        try:
            return {
                "raw": self.motd_raw,
                "clean": self.motd_clean,
                "html": self.motd_html,
            }[encoding]
        except KeyError:
            raise ValueError(f"Unknown MOTD encoding: {encoding}") from None


class McStatusClient(JSONStatusClient):
    """Client for the mcstatus.io Java status endpoint."""

    source_name = "mcstatus.io API"

    def fetch(self) -> ServerDetails:
        """
        Fetch connection details for the configured server.

        GET https://api.mcstatus.io/v2/status/java/<host>

        Raises:
            StatusFetchError: If the API is unreachable or the payload is malformed.
        """
        data = self._get_json(self.config.mcstatus_url)
        return self._parse_details(data)

    def _parse_details(self, data: dict[str, Any]) -> ServerDetails:
        try:
            motd = data["motd"]
            return ServerDetails(
                host=str(data["host"]),
                ip_address=str(data["ip_address"]),
                port=int(data["port"]),
                protocol=int(data["version"]["protocol"]),
                motd_raw=str(motd["raw"]),
                motd_clean=str(motd["clean"]),
                motd_html=str(motd["html"]),
            )
        except (KeyError, ValueError, TypeError) as e:
            # mcstatus.io sends version/motd as null while the server is offline
            raise StatusFetchError(f"malformed response from {self.source_name}: {e!r}") from e
