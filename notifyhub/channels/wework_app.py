"""WeCom (WeChat Work) application message channel adapter.

Delivery takes two requests: exchange the corp credentials for an access
token, then send the message with that token. The message request is never
issued when the token exchange fails.
"""

import logging
from typing import Any

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.markers import equals
from notifyhub.channels.sender import deliver, read_json, request
from notifyhub.config import Settings
from notifyhub.exceptions import ProviderError
from notifyhub.schemas.channel import WeWorkAppConfig

logger = logging.getLogger(__name__)

SUCCESS = equals("errcode", 0)


def format_token_request(config: WeWorkAppConfig) -> ChannelPayload:
    key = config.app_key
    return ChannelPayload(
        method="POST",
        url=f"{config.qywx_origin}/cgi-bin/gettoken",
        json={"corpid": key.corpid, "corpsecret": key.corpsecret},
    )


def _message_body(message: NotificationMessage, thumb_media_id: str, settings: Settings) -> dict[str, Any]:
    """
    Pick the message kind from ``thumb_media_id``:
    "0" sends a text card, "1" plain text, anything else an mpnews article
    using that id as its cover image.
    """
    if thumb_media_id == "0":
        return {
            "msgtype": "textcard",
            "textcard": {
                "title": message.title,
                "description": message.content,
                "url": settings.project_url,
                "btntxt": "更多",
            },
        }
    if thumb_media_id == "1":
        return {
            "msgtype": "text",
            "text": {"content": f"{message.title}\n\n{message.content}"},
        }
    return {
        "msgtype": "mpnews",
        "mpnews": {
            "articles": [
                {
                    "title": message.title,
                    "thumb_media_id": thumb_media_id,
                    "author": settings.brand_name,
                    "content_source_url": "",
                    "content": message.content.replace("\n", "<br/>"),
                    "digest": message.content,
                }
            ]
        },
    }


def format_wework_app(
    config: WeWorkAppConfig,
    message: NotificationMessage,
    access_token: str,
    settings: Settings,
) -> ChannelPayload:
    key = config.app_key
    return ChannelPayload(
        method="POST",
        url=f"{config.qywx_origin}/cgi-bin/message/send?access_token={access_token}",
        json={
            "touser": key.touser,
            "agentid": key.agentid,
            "safe": "0",
            **_message_body(message, key.thumb_media_id, settings),
        },
    )


async def fetch_access_token(config: WeWorkAppConfig, ctx: SendContext) -> str:
    response = await request(ctx, format_token_request(config))
    data = read_json(response)
    token = data.get("access_token") if isinstance(data, dict) else None
    if not token:
        logger.warning("WeCom token exchange failed: %s", response.text[:200])
        raise ProviderError(response.text, status_code=response.status_code)
    return token


async def send_wework_app(
    message: NotificationMessage, config: WeWorkAppConfig, ctx: SendContext
) -> bool:
    access_token = await fetch_access_token(config, ctx)
    payload = format_wework_app(config, message, access_token, ctx.settings)
    return await deliver(ctx, payload, SUCCESS, channel="weWorkApp")
