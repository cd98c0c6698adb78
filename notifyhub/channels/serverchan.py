"""ServerChan channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import any_of, equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import ServerChanConfig

# Turbo keys answer with a nested ``data`` object.
SUCCESS = any_of(equals("errno", 0), equals("data.errno", 0))


def server_chan_url(push_key: str) -> str:
    if push_key.startswith("SCT"):
        return f"https://sctapi.ftqq.com/{push_key}.send"
    return f"https://sc.ftqq.com/{push_key}.send"


def format_serverchan(config: ServerChanConfig, message: NotificationMessage) -> ChannelPayload:
    return ChannelPayload(
        method="POST",
        url=server_chan_url(config.push_key),
        data={"title": message.title, "desp": message.content},
    )


async def send_serverchan(
    message: NotificationMessage, config: ServerChanConfig, ctx: SendContext
) -> bool:
    return await deliver(ctx, format_serverchan(config, message), SUCCESS, channel="serverChan")
