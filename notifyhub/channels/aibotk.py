"""Aibotk (WeChat assistant bot) channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import AibotkConfig

API_ROOT = "https://api-bot.aibotk.com/openapi/v1/chat"

SUCCESS = equals("code", 0)


def format_aibotk(config: AibotkConfig, message: NotificationMessage, brand: str) -> ChannelPayload:
    """
    Format a message for an aibotk room (group chat) or contact.

    Config expects:
        - aibotkKey: API key
        - aibotkType: "room" or "contact"
        - aibotkName: room name or contact nickname
    """
    body = {
        "apiKey": config.aibotk_key,
        "message": {
            "type": 1,
            "content": f"【{brand}】\n\n{message.title}\n{message.content}",
        },
    }
    if config.aibotk_type == "room":
        body["roomName"] = config.aibotk_name
    else:
        body["name"] = config.aibotk_name

    return ChannelPayload(
        method="POST",
        url=f"{API_ROOT}/{config.aibotk_type}",
        json=body,
    )


async def send_aibotk(message: NotificationMessage, config: AibotkConfig, ctx: SendContext) -> bool:
    payload = format_aibotk(config, message, ctx.settings.brand_name)
    return await deliver(ctx, payload, SUCCESS, channel="aibotk")
