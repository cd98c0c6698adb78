"""iGot channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import IGotConfig

SUCCESS = equals("ret", 0)


def format_igot(config: IGotConfig, message: NotificationMessage) -> ChannelPayload:
    return ChannelPayload(
        method="POST",
        url=f"https://push.hellyw.com/{config.igot_push_key.lower()}",
        data={"title": message.title, "content": message.content},
    )


async def send_igot(message: NotificationMessage, config: IGotConfig, ctx: SendContext) -> bool:
    return await deliver(ctx, format_igot(config, message), SUCCESS, channel="iGot")
