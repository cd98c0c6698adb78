"""Dispatch a notification through the configured channel."""

from typing import Any, Mapping, Optional

from notifyhub.channels import NotificationMessage, SendContext
from notifyhub.channels.registry import resolve
from notifyhub.config import Settings
from notifyhub.config import settings as default_settings
from notifyhub.http import HttpTransport
from notifyhub.mailers import Mailer, SmtpMailer
from notifyhub.sources import NotificationStore, load_system_notify


class Notifier:
    """
    Entry point for sending one notification to one configured channel.

    The three ``*_notify`` methods differ only in where the channel config
    comes from; all of them go through :meth:`notify`.

    Outcome:
        True   delivered
        False  no channel configured, unknown channel type, or no recipients
        raises ChannelValidationError / ProviderError / TransportError
    """

    def __init__(
        self,
        http: Optional[HttpTransport] = None,
        mailer: Optional[Mailer] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self._ctx = SendContext(
            http=http or HttpTransport.from_settings(self.settings),
            mailer=mailer or SmtpMailer(timeout=self.settings.smtp_timeout),
            settings=self.settings,
        )

    async def notify(self, title: str, content: str, info: Optional[Mapping[str, Any]]) -> bool:
        params = dict(info or {})
        channel_type = params.pop("type", None)
        if not channel_type:
            return False

        channel = resolve(channel_type)
        if channel is None:
            return False

        config = channel.parse_config(params)
        return await channel.send(NotificationMessage(title, content), config, self._ctx)

    async def external_notify(self, title: str, content: str) -> bool:
        """Send through the system-wide channel from ``settings.system_notify_file``."""
        info = load_system_notify(self.settings.system_notify_file)
        return await self.notify(title, content, info)

    async def user_notify(
        self, title: str, content: str, store: NotificationStore, user_id: str
    ) -> bool:
        """Send through the channel a user saved in ``store``."""
        info = await store.get_notification_mode(user_id)
        return await self.notify(title, content, info)

    async def test_notify(self, info: Mapping[str, Any], title: str, content: str) -> bool:
        """Send through a caller-supplied channel config."""
        return await self.notify(title, content, info)
