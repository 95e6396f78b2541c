"""
API clients for Haole.

Provides wrappers for the HavenMC and mcstatus.io status APIs.
"""

from .base import StatusFetchError
from .haven_client import HavenStatusClient, ServerStatus
from .mcstatus_client import McStatusClient, ServerDetails

__all__ = [
    "HavenStatusClient",
    "McStatusClient",
    "ServerDetails",
    "ServerStatus",
    "StatusFetchError",
]
