"""PushPlus channel adapter."""

import re

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import PushPlusConfig

SEND_URL = "https://www.pushplus.plus/send"

SUCCESS = equals("code", 200)

_NEWLINE_RE = re.compile(r"[\n\r]")


def format_pushplus(config: PushPlusConfig, message: NotificationMessage) -> ChannelPayload:
    """
    Config expects:
        - pushPlusToken: user token
        - pushPlusUser: optional group (topic) code for one-to-many pushes
    """
    return ChannelPayload(
        method="POST",
        url=SEND_URL,
        json={
            "token": config.push_plus_token,
            "title": message.title,
            "content": _NEWLINE_RE.sub("<br>", message.content),
            "topic": config.push_plus_user or "",
        },
    )


async def send_pushplus(message: NotificationMessage, config: PushPlusConfig, ctx: SendContext) -> bool:
    return await deliver(ctx, format_pushplus(config, message), SUCCESS, channel="pushPlus")
