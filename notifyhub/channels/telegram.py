"""Telegram bot channel adapter."""

from typing import Optional

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import truthy
from notifyhub.channels.sender import deliver
from notifyhub.schemas.channel import TelegramBotConfig

DEFAULT_API_HOST = "https://api.telegram.org"

SUCCESS = truthy("ok")


def proxy_url(config: TelegramBotConfig) -> Optional[str]:
    """HTTP proxy URL, only when both host and port are configured."""
    if not (config.tg_proxy_host and config.tg_proxy_port):
        return None
    auth = f"{config.tg_proxy_auth}@" if config.tg_proxy_auth else ""
    return f"http://{auth}{config.tg_proxy_host}:{config.tg_proxy_port}"


def format_telegram(config: TelegramBotConfig, message: NotificationMessage) -> ChannelPayload:
    """
    Format a notification for the Telegram bot API.

    Config expects:
        - tgBotToken: bot token
        - tgUserId: target chat id
        - tgApiHost: optional API mirror, defaults to api.telegram.org
        - tgProxyHost / tgProxyPort / tgProxyAuth: optional HTTP proxy
    """
    api_host = config.tg_api_host or DEFAULT_API_HOST
    return ChannelPayload(
        method="POST",
        url=f"{api_host}/bot{config.tg_bot_token}/sendMessage",
        data={
            "chat_id": config.tg_user_id,
            "text": f"{message.title}\n\n{message.content}",
            "disable_web_page_preview": "true",
        },
        proxy=proxy_url(config),
    )


async def send_telegram(
    message: NotificationMessage, config: TelegramBotConfig, ctx: SendContext
) -> bool:
    return await deliver(ctx, format_telegram(config, message), SUCCESS, channel="telegramBot")
