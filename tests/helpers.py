"""Test doubles for the HTTP transport and the mailer."""

import json
from typing import Any, Callable, Optional

import httpx

from notifyhub.mailers.base import Mailer, SmtpAccount


def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    """Response whose raw text is exactly ``json.dumps(body)``."""
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


class FakeMailer(Mailer):
    def __init__(self, message_id: Optional[str] = "<1@mail.test>"):
        self.message_id = message_id
        self.sent: list[dict] = []

    async def send_mail(self, account: SmtpAccount, from_addr: str, to: str, subject: str, html: str):
        self.sent.append(
            {"account": account, "from_addr": from_addr, "to": to, "subject": subject, "html": html}
        )
        return self.message_id
