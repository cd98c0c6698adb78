import base64
import hashlib
import hmac
import json
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from helpers import json_response
from notifyhub.channels import NotificationMessage
from notifyhub.channels.dingtalk import format_dingtalk, sign
from notifyhub.schemas.channel import DingtalkBotConfig

TIMESTAMP = 1700000000000


def test_sign_matches_hmac_sha256():
    expected = base64.b64encode(
        hmac.new(b"SEC1", f"{TIMESTAMP}\nSEC1".encode(), hashlib.sha256).digest()
    ).decode()

    signature = sign("SEC1", TIMESTAMP)

    assert unquote(signature) == expected
    # Fully URL-encoded: no raw base64 punctuation survives
    assert not set(signature) & set("+/=")


def test_sign_is_deterministic():
    assert sign("SEC1", TIMESTAMP) == sign("SEC1", TIMESTAMP)
    assert sign("SEC1", TIMESTAMP) != sign("SEC1", TIMESTAMP + 1)
    assert sign("SEC1", TIMESTAMP) != sign("SEC2", TIMESTAMP)


def test_signed_url():
    config = DingtalkBotConfig.model_validate({"ddBotToken": "tok", "ddBotSecret": "SEC1"})

    payload = format_dingtalk(config, NotificationMessage("A", "B"), timestamp=TIMESTAMP)

    assert payload.url == (
        "https://oapi.dingtalk.com/robot/send?access_token=tok"
        f"&timestamp={TIMESTAMP}&sign={sign('SEC1', TIMESTAMP)}"
    )
    assert payload.json == {"msgtype": "text", "text": {"content": " A\n\nB"}}


def test_unsigned_url_without_secret():
    config = DingtalkBotConfig.model_validate({"ddBotToken": "tok"})

    payload = format_dingtalk(config, NotificationMessage("A", "B"))

    assert payload.url == "https://oapi.dingtalk.com/robot/send?access_token=tok"


@pytest.mark.asyncio
async def test_send_carries_current_timestamp(make_notifier):
    notifier, transport = make_notifier(lambda r: json_response({"errcode": 0}))

    await notifier.test_notify({"type": "dingtalkBot", "ddBotToken": "tok", "ddBotSecret": "SEC1"}, "A", "B")

    request = transport.requests[0]
    query = parse_qs(urlsplit(str(request.url)).query)
    timestamp = int(query["timestamp"][0])
    assert query["access_token"] == ["tok"]
    assert query["sign"] == [unquote(sign("SEC1", timestamp))]
    assert json.loads(request.content)["msgtype"] == "text"
