"""
Shared HTTP plumbing for the status API clients.
"""

from typing import Any, Optional

import httpx

from .. import __version__
from ..config import Config, get_config
from ..logging_config import get_logger

logger = get_logger(__name__)


class StatusFetchError(Exception):
    """Raised when a status API cannot be reached or returns unusable data."""


class JSONStatusClient:
    """
    Base class for clients that GET a single JSON document.

    Subclasses set ``source_name`` and implement ``fetch``.
    """

    source_name = "status API"

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Optional configuration override.
            transport: Optional httpx transport (used by tests to mock responses).
        """
        self.config = config or get_config()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "User-Agent": f"haole/{__version__}",
                    "Accept": "application/json",
                },
                timeout=self.config.request_timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def _get_json(self, url: str) -> dict[str, Any]:
        """
        GET a URL and decode its JSON body.

        Raises:
            StatusFetchError: On transport errors, HTTP errors or a non-object body.
        """
        logger.debug(f"Fetching {self.source_name}: {url}")

        try:
            response = self.client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.debug(f"Response text: {e.response.text[:500]}")
            raise StatusFetchError(
                f"{self.source_name} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise StatusFetchError(f"could not reach {self.source_name}: {e}") from e
        except ValueError as e:
            raise StatusFetchError(f"{self.source_name} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise StatusFetchError(f"{self.source_name} returned an unexpected payload")
        return data

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, *args) -> None:
        self.close()
