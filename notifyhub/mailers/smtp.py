"""SMTP mailer (well-known services or any host:port)."""

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from email.utils import make_msgid
from functools import partial
from typing import Optional

from notifyhub.exceptions import ChannelValidationError, TransportError
from notifyhub.mailers.base import Mailer, SmtpAccount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SmtpServer:
    host: str
    port: int
    secure: bool  # implicit TLS; otherwise STARTTLS


# Keys are lower-cased service names as users usually type them.
WELL_KNOWN_SERVICES: dict[str, SmtpServer] = {
    "126": SmtpServer("smtp.126.com", 465, True),
    "163": SmtpServer("smtp.163.com", 465, True),
    "139": SmtpServer("smtp.139.com", 465, True),
    "qq": SmtpServer("smtp.qq.com", 465, True),
    "qiye.aliyun": SmtpServer("smtp.mxhichina.com", 465, True),
    "aliyun": SmtpServer("smtp.aliyun.com", 465, True),
    "gmail": SmtpServer("smtp.gmail.com", 465, True),
    "hotmail": SmtpServer("smtp-mail.outlook.com", 587, False),
    "outlook365": SmtpServer("smtp.office365.com", 587, False),
    "icloud": SmtpServer("smtp.mail.me.com", 587, False),
    "yahoo": SmtpServer("smtp.mail.yahoo.com", 465, True),
    "yandex": SmtpServer("smtp.yandex.ru", 465, True),
    "zoho": SmtpServer("smtp.zoho.com", 465, True),
    "sendgrid": SmtpServer("smtp.sendgrid.net", 587, False),
    "mailgun": SmtpServer("smtp.mailgun.org", 465, True),
}


def resolve_server(service: str) -> SmtpServer:
    """
    Map a service name to its SMTP endpoint.

    Accepts a well-known name (case-insensitive) or an explicit ``host[:port]``;
    port 465 means implicit TLS, anything else uses STARTTLS.
    """
    name = (service or "").strip()
    known = WELL_KNOWN_SERVICES.get(name.lower())
    if known:
        return known

    host, _, port = name.partition(":")
    # A bare word is only a host when it carries a port (localhost:1025)
    if not host or (not port and "." not in host):
        raise ChannelValidationError(f"Unknown SMTP service: {service!r}")

    try:
        port_number = int(port) if port else 465
    except ValueError:
        raise ChannelValidationError(f"Invalid SMTP port in {service!r}")
    return SmtpServer(host, port_number, port_number == 465)


class SmtpMailer(Mailer):
    """Send email via an SMTP server, running smtplib in the default executor."""

    def __init__(self, timeout: float = 20):
        self.timeout = timeout

    def _send_sync(
        self,
        server: SmtpServer,
        account: SmtpAccount,
        from_addr: str,
        to: str,
        subject: str,
        html: str,
    ) -> str:
        """Synchronous SMTP send."""
        msg = MIMEText(html, "html", "utf-8")
        msg["Subject"] = subject
        msg["From"] = from_addr
        msg["To"] = to
        msg["Message-ID"] = make_msgid(domain=server.host)

        if server.secure:
            with smtplib.SMTP_SSL(server.host, server.port, timeout=self.timeout) as client:
                client.login(account.username, account.password)
                client.send_message(msg)
        else:
            with smtplib.SMTP(server.host, server.port, timeout=self.timeout) as client:
                client.starttls()
                if account.username:
                    client.login(account.username, account.password)
                client.send_message(msg)

        logger.info("Email sent via SMTP host=%s to=%s subject=%s", server.host, to, subject)
        return msg["Message-ID"]

    async def send_mail(
        self,
        account: SmtpAccount,
        from_addr: str,
        to: str,
        subject: str,
        html: str,
    ) -> Optional[str]:
        """Send email asynchronously by running sync SMTP in executor."""
        server = resolve_server(account.service)
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                None,
                partial(self._send_sync, server, account, from_addr, to, subject, html),
            )
        except (smtplib.SMTPException, OSError) as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
