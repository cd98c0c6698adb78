"""WePlusBot channel adapter."""

import re

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import WePlusBotConfig

SEND_URL = "https://www.weplusbot.com/send"

# Longer messages are sent as HTML
TEXT_LIMIT = 800

SUCCESS = equals("code", 200)

_NEWLINE_RE = re.compile(r"[\n\r]")


def format_weplusbot(config: WePlusBotConfig, message: NotificationMessage) -> ChannelPayload:
    content = message.content
    template = "txt"
    if len(content) > TEXT_LIMIT:
        template = "html"
        content = _NEWLINE_RE.sub("<br>", content)

    return ChannelPayload(
        method="POST",
        url=SEND_URL,
        json={
            "token": config.we_plus_bot_token,
            "title": message.title,
            "template": template,
            "content": content,
            "receiver": config.we_plus_bot_receiver or "",
            "version": config.we_plus_bot_version or "pro",
        },
    )


async def send_weplusbot(
    message: NotificationMessage, config: WePlusBotConfig, ctx: SendContext
) -> bool:
    return await deliver(ctx, format_weplusbot(config, message), SUCCESS, channel="wePlusBot")
