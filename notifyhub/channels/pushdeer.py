"""PushDeer channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import non_empty
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import PushDeerConfig

DEFAULT_URL = "https://api2.pushdeer.com/message/push"

SUCCESS = non_empty("content.result")


def format_pushdeer(config: PushDeerConfig, message: NotificationMessage) -> ChannelPayload:
    """
    Format a markdown push for PushDeer.

    Config expects:
        - deerKey: push key
        - deerUrl: optional self-hosted endpoint
    """
    return ChannelPayload(
        method="POST",
        url=config.deer_url or DEFAULT_URL,
        data={
            "pushkey": config.deer_key,
            "text": message.title,
            "desp": message.content,
            "type": "markdown",
        },
    )


async def send_pushdeer(message: NotificationMessage, config: PushDeerConfig, ctx: SendContext) -> bool:
    return await deliver(ctx, format_pushdeer(config, message), SUCCESS, channel="pushDeer")
