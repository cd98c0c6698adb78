"""Pydantic models for per-channel configuration.

Configs arrive as ``{"type": ..., **params}`` with camelCase keys
(``gotifyUrl``, ``tgBotToken``...). Each channel type has one frozen model;
the ``type`` literal is the discriminant.
"""

from enum import Enum
from typing import Literal, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ChannelType(str, Enum):
    GOTIFY = "gotify"
    GO_CQHTTP_BOT = "goCqHttpBot"
    SERVER_CHAN = "serverChan"
    PUSH_DEER = "pushDeer"
    CHAT = "chat"
    BARK = "bark"
    TELEGRAM_BOT = "telegramBot"
    DINGTALK_BOT = "dingtalkBot"
    WEWORK_BOT = "weWorkBot"
    WEWORK_APP = "weWorkApp"
    AIBOTK = "aibotk"
    IGOT = "iGot"
    PUSH_PLUS = "pushPlus"
    WE_PLUS_BOT = "wePlusBot"
    EMAIL = "email"
    PUSH_ME = "pushMe"
    WEBHOOK = "webhook"
    LARK = "lark"
    CHRONOCAT = "chronocat"


WEWORK_ORIGIN = "https://qyapi.weixin.qq.com"


class ChannelConfig(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        frozen=True,
        extra="ignore",
    )


class GotifyConfig(ChannelConfig):
    type: Literal["gotify"] = "gotify"
    gotify_url: str
    gotify_token: str
    gotify_priority: int = 1


class GoCqHttpBotConfig(ChannelConfig):
    type: Literal["goCqHttpBot"] = "goCqHttpBot"
    gobot_url: str
    gobot_token: str = ""
    gobot_qq: str = ""


class ServerChanConfig(ChannelConfig):
    type: Literal["serverChan"] = "serverChan"
    push_key: str


class PushDeerConfig(ChannelConfig):
    type: Literal["pushDeer"] = "pushDeer"
    deer_key: str
    deer_url: Optional[str] = None


class ChatConfig(ChannelConfig):
    type: Literal["chat"] = "chat"
    chat_url: str
    chat_token: str


class BarkConfig(ChannelConfig):
    type: Literal["bark"] = "bark"
    bark_push: str
    bark_icon: str = ""
    bark_sound: str = ""
    bark_group: str = ""
    bark_level: str = ""
    bark_url: str = ""
    bark_archive: str = ""


class TelegramBotConfig(ChannelConfig):
    type: Literal["telegramBot"] = "telegramBot"
    tg_bot_token: str
    tg_user_id: str
    tg_api_host: Optional[str] = None
    tg_proxy_host: Optional[str] = None
    tg_proxy_port: Optional[str] = None
    tg_proxy_auth: Optional[str] = None


class DingtalkBotConfig(ChannelConfig):
    type: Literal["dingtalkBot"] = "dingtalkBot"
    dd_bot_token: str
    dd_bot_secret: Optional[str] = None


class WeWorkBotConfig(ChannelConfig):
    type: Literal["weWorkBot"] = "weWorkBot"
    qywx_key: str
    qywx_origin: str = WEWORK_ORIGIN


class WeWorkAppKey(NamedTuple):
    corpid: str
    corpsecret: str
    touser: str
    agentid: str
    thumb_media_id: str


class WeWorkAppConfig(ChannelConfig):
    """``qywxKey`` packs ``corpid,corpsecret,touser,agentid[,thumb_media_id]``."""

    type: Literal["weWorkApp"] = "weWorkApp"
    qywx_key: str
    qywx_origin: str = WEWORK_ORIGIN

    @field_validator("qywx_key")
    @classmethod
    def _check_key(cls, value: str) -> str:
        if len(value.split(",")) < 4:
            raise ValueError("qywxKey must be 'corpid,corpsecret,touser,agentid[,thumb_media_id]'")
        return value

    @property
    def app_key(self) -> WeWorkAppKey:
        parts = self.qywx_key.split(",")
        thumb_media_id = parts[4] if len(parts) > 4 else "1"
        return WeWorkAppKey(parts[0], parts[1], parts[2], parts[3], thumb_media_id)


class AibotkConfig(ChannelConfig):
    type: Literal["aibotk"] = "aibotk"
    aibotk_key: str
    aibotk_type: Literal["room", "contact"]
    aibotk_name: str


class IGotConfig(ChannelConfig):
    type: Literal["iGot"] = "iGot"
    igot_push_key: str


class PushPlusConfig(ChannelConfig):
    type: Literal["pushPlus"] = "pushPlus"
    push_plus_token: str
    push_plus_user: Optional[str] = None


class WePlusBotConfig(ChannelConfig):
    type: Literal["wePlusBot"] = "wePlusBot"
    we_plus_bot_token: str
    we_plus_bot_receiver: Optional[str] = None
    we_plus_bot_version: Optional[str] = None


class EmailConfig(ChannelConfig):
    type: Literal["email"] = "email"
    smtp_service: str
    smtp_name: str
    smtp_password: str


class PushMeConfig(ChannelConfig):
    type: Literal["pushMe"] = "pushMe"
    pushme_key: str
    pushme_url: Optional[str] = None


class WebhookConfig(ChannelConfig):
    type: Literal["webhook"] = "webhook"
    webhook_url: str = ""
    webhook_body: str = ""
    webhook_headers: str = ""
    webhook_method: str = "POST"
    webhook_content_type: str = ""


class LarkConfig(ChannelConfig):
    type: Literal["lark"] = "lark"
    fskey: str


class ChronocatConfig(ChannelConfig):
    type: Literal["chronocat"] = "chronocat"
    chronocat_url: str = Field(alias="chronocatURL")
    chronocat_qq: str = Field(alias="chronocatQQ")
    chronocat_token: str = ""
