"""go-cqhttp (OneBot) channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import GoCqHttpBotConfig

SUCCESS = equals("retcode", 0)


def format_gocqhttp(config: GoCqHttpBotConfig, message: NotificationMessage) -> ChannelPayload:
    """
    Format a notification for a go-cqhttp bot.

    Config expects:
        - gobotUrl: send endpoint, e.g. http://127.0.0.1:5700/send_private_msg
        - gobotQq: query string selecting the target, e.g. user_id=10000
        - gobotToken: access token, sent as a Bearer header
    """
    return ChannelPayload(
        method="POST",
        url=f"{config.gobot_url}?{config.gobot_qq}",
        headers={"Authorization": f"Bearer {config.gobot_token}"},
        json={"message": f"{message.title}\n{message.content}"},
    )


async def send_gocqhttp(
    message: NotificationMessage, config: GoCqHttpBotConfig, ctx: SendContext
) -> bool:
    return await deliver(ctx, format_gocqhttp(config, message), SUCCESS, channel="goCqHttpBot")
