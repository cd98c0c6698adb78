"""DingTalk custom robot channel adapter."""

import base64
import hashlib
import hmac
import time
from typing import Optional
from urllib.parse import quote

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import DingtalkBotConfig

SEND_URL = "https://oapi.dingtalk.com/robot/send"

SUCCESS = equals("errcode", 0)


def sign(secret: str, timestamp: int) -> str:
    """URL-encoded base64 of HMAC-SHA256(secret, "{timestamp}\\n{secret}")."""
    digest = hmac.new(
        secret.encode("utf-8"),
        f"{timestamp}\n{secret}".encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return quote(base64.b64encode(digest).decode("ascii"), safe="")


def format_dingtalk(
    config: DingtalkBotConfig,
    message: NotificationMessage,
    timestamp: Optional[int] = None,
) -> ChannelPayload:
    """
    Format a text message for a DingTalk robot.

    When ``ddBotSecret`` is set the URL carries ``timestamp`` (milliseconds)
    and ``sign`` query parameters.
    """
    url = f"{SEND_URL}?access_token={config.dd_bot_token}"
    if config.dd_bot_secret:
        if timestamp is None:
            timestamp = int(time.time() * 1000)
        url += f"&timestamp={timestamp}&sign={sign(config.dd_bot_secret, timestamp)}"

    return ChannelPayload(
        method="POST",
        url=url,
        json={
            "msgtype": "text",
            "text": {"content": f" {message.title}\n\n{message.content}"},
        },
    )


async def send_dingtalk(
    message: NotificationMessage, config: DingtalkBotConfig, ctx: SendContext
) -> bool:
    return await deliver(ctx, format_dingtalk(config, message), SUCCESS, channel="dingtalkBot")
