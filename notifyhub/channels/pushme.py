"""PushMe channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver, read_text
from notifyhub.schemas.channel import PushMeConfig

DEFAULT_URL = "https://push.i-i.me/"

# PushMe answers with a bare text body rather than JSON.
SUCCESS = equals("", "success")


def format_pushme(config: PushMeConfig, message: NotificationMessage) -> ChannelPayload:
    return ChannelPayload(
        method="POST",
        url=config.pushme_url or DEFAULT_URL,
        headers={"Content-Type": "application/json"},
        json={
            "push_key": config.pushme_key,
            "title": message.title,
            "content": message.content,
        },
    )


async def send_pushme(message: NotificationMessage, config: PushMeConfig, ctx: SendContext) -> bool:
    payload = format_pushme(config, message)
    return await deliver(ctx, payload, SUCCESS, channel="pushMe", parse=read_text)
