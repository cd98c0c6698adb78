"""Gotify channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import is_number
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import GotifyConfig

SUCCESS = is_number("id")


def format_gotify(config: GotifyConfig, message: NotificationMessage) -> ChannelPayload:
    """
    Format a notification for a Gotify server.

    Config expects:
        - gotifyUrl: server root, e.g. https://push.example.com
        - gotifyToken: application token
        - gotifyPriority: optional, defaults to 1
    """
    return ChannelPayload(
        method="POST",
        url=f"{config.gotify_url}/message?token={config.gotify_token}",
        data={
            "title": message.title,
            "message": message.content,
            "priority": config.gotify_priority,
        },
    )


async def send_gotify(message: NotificationMessage, config: GotifyConfig, ctx: SendContext) -> bool:
    return await deliver(ctx, format_gotify(config, message), SUCCESS, channel="gotify")
