"""Synology Chat incoming-webhook channel adapter."""

import json

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import truthy
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import ChatConfig

SUCCESS = truthy("success")


def format_chat(config: ChatConfig, message: NotificationMessage) -> ChannelPayload:
    # The webhook takes a single form field holding a JSON document.
    text = json.dumps({"text": f"{message.title}\n{message.content}"}, ensure_ascii=False)
    return ChannelPayload(
        method="POST",
        url=f"{config.chat_url}{config.chat_token}",
        data={"payload": text},
    )


async def send_chat(message: NotificationMessage, config: ChatConfig, ctx: SendContext) -> bool:
    return await deliver(ctx, format_chat(config, message), SUCCESS, channel="chat")
