"""Bark (iOS push) channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import BarkConfig

BARK_HOST = "https://api.day.app"

SUCCESS = equals("code", 200)


def bark_url(bark_push: str) -> str:
    """A bare device key is expanded to the public Bark server."""
    if bark_push.startswith("http"):
        return bark_push
    return f"{BARK_HOST}/{bark_push}"


def format_bark(config: BarkConfig, message: NotificationMessage) -> ChannelPayload:
    return ChannelPayload(
        method="POST",
        url=bark_url(config.bark_push),
        headers={"Content-Type": "application/json"},
        json={
            "title": message.title,
            "body": message.content,
            "icon": config.bark_icon,
            "sound": config.bark_sound,
            "group": config.bark_group,
            "isArchive": config.bark_archive,
            "level": config.bark_level,
            "url": config.bark_url,
        },
    )


async def send_bark(message: NotificationMessage, config: BarkConfig, ctx: SendContext) -> bool:
    return await deliver(ctx, format_bark(config, message), SUCCESS, channel="bark")
