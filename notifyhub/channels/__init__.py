"""Base types for notification channel adapters."""

from dataclasses import dataclass, field
from typing import Any, Optional

from notifyhub.config import Settings
from notifyhub.http import HttpTransport
from notifyhub.mailers.base import Mailer


@dataclass(frozen=True)
class NotificationMessage:
    """The title/content pair being delivered; created once per dispatch."""
    title: str
    content: str


@dataclass(frozen=True)
class ChannelPayload:
    """Represents the HTTP request for a notification channel."""
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    json: Any = None
    data: Optional[dict[str, Any]] = None  # form-urlencoded fields
    content: Optional[str] = None  # raw text body
    files: Optional[dict[str, Any]] = None  # multipart fields
    proxy: Optional[str] = None

    def body_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``httpx.AsyncClient.request``."""
        kwargs: dict[str, Any] = {}
        if self.json is not None:
            kwargs["json"] = self.json
        if self.data is not None:
            kwargs["data"] = self.data
        if self.content is not None:
            kwargs["content"] = self.content
        if self.files is not None:
            kwargs["files"] = self.files
        return kwargs


@dataclass(frozen=True)
class SendContext:
    """Collaborators shared by every adapter call. Holds no per-message state."""
    http: HttpTransport
    mailer: Mailer
    settings: Settings
