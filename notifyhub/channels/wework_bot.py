"""WeCom (WeChat Work) group robot channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import WeWorkBotConfig

SUCCESS = equals("errcode", 0)


def format_wework_bot(config: WeWorkBotConfig, message: NotificationMessage) -> ChannelPayload:
    return ChannelPayload(
        method="POST",
        url=f"{config.qywx_origin}/cgi-bin/webhook/send?key={config.qywx_key}",
        json={
            "msgtype": "text",
            "text": {"content": f" {message.title}\n\n{message.content}"},
        },
    )


async def send_wework_bot(
    message: NotificationMessage, config: WeWorkBotConfig, ctx: SendContext
) -> bool:
    return await deliver(ctx, format_wework_bot(config, message), SUCCESS, channel="weWorkBot")
