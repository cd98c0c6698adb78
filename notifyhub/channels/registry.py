"""Channel registry: maps each ChannelType to its config model and adapter."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional

from pydantic import ValidationError

from notifyhub.channels import NotificationMessage, SendContext
from notifyhub.channels.aibotk import send_aibotk
from notifyhub.channels.bark import send_bark
from notifyhub.channels.chat import send_chat
from notifyhub.channels.chronocat import send_chronocat
from notifyhub.channels.dingtalk import send_dingtalk
from notifyhub.channels.gocqhttp import send_gocqhttp
from notifyhub.channels.gotify import send_gotify
from notifyhub.channels.igot import send_igot
from notifyhub.channels.lark import send_lark
from notifyhub.channels.mail import send_email
from notifyhub.channels.pushdeer import send_pushdeer
from notifyhub.channels.pushme import send_pushme
from notifyhub.channels.pushplus import send_pushplus
from notifyhub.channels.serverchan import send_serverchan
from notifyhub.channels.telegram import send_telegram
from notifyhub.channels.webhook import send_webhook
from notifyhub.channels.weplusbot import send_weplusbot
from notifyhub.channels.wework_app import send_wework_app
from notifyhub.channels.wework_bot import send_wework_bot
from notifyhub.exceptions import ChannelValidationError
from notifyhub.schemas.channel import (
    AibotkConfig,
    BarkConfig,
    ChannelConfig,
    ChannelType,
    ChatConfig,
    ChronocatConfig,
    DingtalkBotConfig,
    EmailConfig,
    GoCqHttpBotConfig,
    GotifyConfig,
    IGotConfig,
    LarkConfig,
    PushDeerConfig,
    PushMeConfig,
    PushPlusConfig,
    ServerChanConfig,
    TelegramBotConfig,
    WebhookConfig,
    WePlusBotConfig,
    WeWorkAppConfig,
    WeWorkBotConfig,
)

logger = logging.getLogger(__name__)

SendFn = Callable[[NotificationMessage, Any, SendContext], Awaitable[bool]]


@dataclass(frozen=True)
class Channel:
    type: ChannelType
    config_model: type[ChannelConfig]
    send: SendFn

    def parse_config(self, params: Mapping[str, Any]) -> ChannelConfig:
        """Validate raw params against this channel's config model."""
        try:
            return self.config_model.model_validate({**params, "type": self.type.value})
        except ValidationError as e:
            raise ChannelValidationError(f"Invalid {self.type.value} config: {e}") from e


REGISTRY: Mapping[ChannelType, Channel] = MappingProxyType({
    channel.type: channel
    for channel in (
        Channel(ChannelType.GOTIFY, GotifyConfig, send_gotify),
        Channel(ChannelType.GO_CQHTTP_BOT, GoCqHttpBotConfig, send_gocqhttp),
        Channel(ChannelType.SERVER_CHAN, ServerChanConfig, send_serverchan),
        Channel(ChannelType.PUSH_DEER, PushDeerConfig, send_pushdeer),
        Channel(ChannelType.CHAT, ChatConfig, send_chat),
        Channel(ChannelType.BARK, BarkConfig, send_bark),
        Channel(ChannelType.TELEGRAM_BOT, TelegramBotConfig, send_telegram),
        Channel(ChannelType.DINGTALK_BOT, DingtalkBotConfig, send_dingtalk),
        Channel(ChannelType.WEWORK_BOT, WeWorkBotConfig, send_wework_bot),
        Channel(ChannelType.WEWORK_APP, WeWorkAppConfig, send_wework_app),
        Channel(ChannelType.AIBOTK, AibotkConfig, send_aibotk),
        Channel(ChannelType.IGOT, IGotConfig, send_igot),
        Channel(ChannelType.PUSH_PLUS, PushPlusConfig, send_pushplus),
        Channel(ChannelType.WE_PLUS_BOT, WePlusBotConfig, send_weplusbot),
        Channel(ChannelType.EMAIL, EmailConfig, send_email),
        Channel(ChannelType.PUSH_ME, PushMeConfig, send_pushme),
        Channel(ChannelType.WEBHOOK, WebhookConfig, send_webhook),
        Channel(ChannelType.LARK, LarkConfig, send_lark),
        Channel(ChannelType.CHRONOCAT, ChronocatConfig, send_chronocat),
    )
})


def _check_registry() -> None:
    missing = [t.value for t in ChannelType if t not in REGISTRY]
    if missing:
        raise RuntimeError(f"Channel types without an adapter: {', '.join(missing)}")
    for channel_type, channel in REGISTRY.items():
        declared = channel.config_model.model_fields["type"].default
        if declared != channel_type.value:
            raise RuntimeError(
                f"{channel.config_model.__name__} declares type {declared!r}, "
                f"registered as {channel_type.value!r}"
            )


_check_registry()


def resolve(channel_type: str) -> Optional[Channel]:
    """Look up the adapter for a channel type. Unknown types resolve to None."""
    try:
        kind = ChannelType(channel_type)
    except ValueError:
        logger.warning("Unknown channel type: %s", channel_type)
        return None
    return REGISTRY[kind]


def validate_channel_info(info: Mapping[str, Any]) -> ChannelConfig:
    """
    Validate a full ``{type, ...params}`` mapping before it is stored.

    Unlike dispatch, a missing or unknown type is an error here.
    """
    params = dict(info)
    channel_type = params.pop("type", None)
    if not channel_type:
        raise ChannelValidationError("Missing channel type")
    channel = resolve(str(channel_type))
    if channel is None:
        raise ChannelValidationError(f"Unknown channel type: {channel_type}")
    return channel.parse_config(params)
