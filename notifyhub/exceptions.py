"""Exceptions raised while dispatching a notification."""

from typing import Optional


class NotifyError(Exception):
    """Base exception for all delivery errors."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize NotifyError.

        Args:
            message: Diagnostic text (raw provider body or transport error text)
            status_code: HTTP status code of the provider reply, if any
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ChannelValidationError(NotifyError):
    """Raised when a channel config fails a precondition before any network call."""


class ProviderError(NotifyError):
    """Raised when the provider replied but did not report success."""


class TransportError(NotifyError):
    """Raised when the request could not be delivered (network, timeout, SMTP)."""
