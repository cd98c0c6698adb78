"""Lark (Feishu) custom bot channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import any_of, equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import LarkConfig

HOOK_ROOT = "https://open.feishu.cn/open-apis/bot/v2/hook"

# Older bots answer with StatusCode, newer ones with code.
SUCCESS = any_of(equals("StatusCode", 0), equals("code", 0))


def lark_url(fskey: str) -> str:
    if fskey.startswith("http"):
        return fskey
    return f"{HOOK_ROOT}/{fskey}"


def format_lark(config: LarkConfig, message: NotificationMessage) -> ChannelPayload:
    return ChannelPayload(
        method="POST",
        url=lark_url(config.fskey),
        headers={"Content-Type": "application/json"},
        json={
            "msg_type": "text",
            "content": {"text": f"{message.title}\n\n{message.content}"},
        },
    )


async def send_lark(message: NotificationMessage, config: LarkConfig, ctx: SendContext) -> bool:
    return await deliver(ctx, format_lark(config, message), SUCCESS, channel="lark")
