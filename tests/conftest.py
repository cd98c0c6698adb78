from typing import Callable, Optional

import httpx
import pytest

from helpers import FakeMailer, RecordingTransport, json_response
from notifyhub.config import Settings
from notifyhub.dispatcher import Notifier
from notifyhub.http import HttpTransport
from notifyhub.mailers.base import Mailer


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        system_notify_file=str(tmp_path / "notify.json"),
        brand_name="NotifyHub",
        project_url="https://status.example.com",
    )


@pytest.fixture
def make_notifier(test_settings):
    """Build a Notifier whose HTTP layer is served by ``handler``."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response] = lambda r: json_response({}),
        mailer: Optional[Mailer] = None,
    ) -> tuple[Notifier, RecordingTransport]:
        transport = RecordingTransport(handler)
        notifier = Notifier(
            http=HttpTransport(transport=transport),
            mailer=mailer or FakeMailer(),
            settings=test_settings,
        )
        return notifier, transport

    return _make
