"""Custom exception hierarchy for the results collector.

Exception tree:
    CollectorError
    +-- DiscoveryError   (result directory missing or unreadable)
    +-- TransportError   (POST to the remote collector failed)
"""

from typing import Optional


class CollectorError(Exception):
    """Base exception for all collector errors."""


class DiscoveryError(CollectorError):
    """The result directory could not be listed.

    Fatal for the run: without a file listing there is nothing to send.
    """

    def __init__(self, message: str, *, directory: Optional[str] = None):
        self.directory = directory
        super().__init__(message)


class TransportError(CollectorError):
    """The batch could not be delivered to the remote collector.

    Covers connection errors, timeouts and non-2xx responses. Never
    retried -- the caller reports the failure and the run ends.
    """

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ):
        self.url = url
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)
