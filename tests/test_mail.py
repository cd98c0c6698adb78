import smtplib
from email import message_from_string

import pytest

from helpers import FakeMailer
from notifyhub.exceptions import ChannelValidationError, ProviderError, TransportError
from notifyhub.mailers import SmtpAccount, SmtpMailer, resolve_server
from notifyhub.mailers.smtp import SmtpServer

EMAIL_INFO = {"type": "email", "smtpService": "qq", "smtpName": "ops@qq.com", "smtpPassword": "pw"}


@pytest.mark.asyncio
async def test_email_goes_to_own_address(make_notifier):
    mailer = FakeMailer()
    notifier, transport = make_notifier(mailer=mailer)

    assert await notifier.test_notify(EMAIL_INFO, "Backup", "line1\nline2") is True

    assert transport.requests == []
    assert mailer.sent == [
        {
            "account": SmtpAccount(service="qq", username="ops@qq.com", password="pw"),
            "from_addr": "NotifyHub <ops@qq.com>",
            "to": "ops@qq.com",
            "subject": "Backup",
            "html": "line1<br/>line2",
        }
    ]


@pytest.mark.asyncio
async def test_email_without_message_id_fails(make_notifier):
    notifier, _ = make_notifier(mailer=FakeMailer(message_id=None))

    with pytest.raises(ProviderError):
        await notifier.test_notify(EMAIL_INFO, "A", "B")


@pytest.mark.parametrize(
    "service, expected",
    [
        ("qq", SmtpServer("smtp.qq.com", 465, True)),
        ("Gmail", SmtpServer("smtp.gmail.com", 465, True)),
        ("hotmail", SmtpServer("smtp-mail.outlook.com", 587, False)),
        ("mail.example.com", SmtpServer("mail.example.com", 465, True)),
        ("mail.example.com:587", SmtpServer("mail.example.com", 587, False)),
        ("localhost:1025", SmtpServer("localhost", 1025, False)),
        ("mailhog:1025", SmtpServer("mailhog", 1025, False)),
    ],
)
def test_resolve_server(service, expected):
    assert resolve_server(service) == expected


@pytest.mark.parametrize("service", ["nosuchmail", "", ":25", "mail.example.com:abc"])
def test_resolve_server_rejects(service):
    with pytest.raises(ChannelValidationError):
        resolve_server(service)


class _FakeSMTP:
    instances: list = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        self.messages = []
        _FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(("login", username, password))

    def send_message(self, msg):
        self.messages.append(msg)


class _RefusingSMTP(_FakeSMTP):
    def login(self, username, password):
        raise smtplib.SMTPAuthenticationError(535, b"auth failed")


@pytest.fixture
def fake_smtp(monkeypatch):
    _FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, "SMTP_SSL", _FakeSMTP)
    monkeypatch.setattr(smtplib, "SMTP", _FakeSMTP)
    return _FakeSMTP


@pytest.mark.asyncio
async def test_smtp_mailer_implicit_tls(fake_smtp):
    account = SmtpAccount("qq", "ops@qq.com", "pw")

    message_id = await SmtpMailer().send_mail(account, "NotifyHub <ops@qq.com>", "ops@qq.com", "Hi", "<b>x</b>")

    client = fake_smtp.instances[0]
    assert (client.host, client.port) == ("smtp.qq.com", 465)
    assert client.calls == [("login", "ops@qq.com", "pw")]
    sent = message_from_string(client.messages[0].as_string())
    assert sent["Subject"] == "Hi"
    assert sent["To"] == "ops@qq.com"
    assert sent["Message-ID"] == message_id
    assert message_id.endswith("@smtp.qq.com>")


@pytest.mark.asyncio
async def test_smtp_mailer_starttls(fake_smtp):
    account = SmtpAccount("mail.example.com:587", "ops@example.com", "pw")

    await SmtpMailer().send_mail(account, "ops@example.com", "ops@example.com", "Hi", "x")

    client = fake_smtp.instances[0]
    assert client.port == 587
    assert client.calls == ["starttls", ("login", "ops@example.com", "pw")]


@pytest.mark.asyncio
async def test_smtp_failure_is_transport_error(monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP_SSL", _RefusingSMTP)
    account = SmtpAccount("163", "ops@163.com", "wrong")

    with pytest.raises(TransportError) as exc_info:
        await SmtpMailer().send_mail(account, "ops@163.com", "ops@163.com", "Hi", "x")
    assert "auth failed" in exc_info.value.message
