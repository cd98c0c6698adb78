"""Base mailer interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SmtpAccount:
    """Login for a mail service: a well-known service name or ``host[:port]``."""
    service: str
    username: str
    password: str


class Mailer(ABC):
    """
    Common interface for outgoing mail.
    Implementations return the message id of the accepted message.
    """

    @abstractmethod
    async def send_mail(
        self,
        account: SmtpAccount,
        from_addr: str,
        to: str,
        subject: str,
        html: str,
    ) -> Optional[str]:
        """Send an HTML email to a single recipient."""
        ...
