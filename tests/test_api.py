import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from helpers import FakeMailer, RecordingTransport, json_response
from notifyhub.config import settings
from notifyhub.database import get_db
from notifyhub.dispatcher import Notifier
from notifyhub.http import HttpTransport
from notifyhub.main import app
from notifyhub.models import Base
from notifyhub.routers.notifications import get_notifier

API_KEY = "test-admin-key"
AUTH = {"X-API-Key": API_KEY}


def _provider(request: httpx.Request) -> httpx.Response:
    # Bark device key "broken" is rejected, everything else succeeds
    if request.url.path.endswith("/broken"):
        return json_response({"code": 400, "message": "failed to get device token"})
    return json_response({"code": 200, "message": "success"})


@pytest.fixture
def transport():
    return RecordingTransport(_provider)


@pytest.fixture
def client(tmp_path, monkeypatch, transport, test_settings):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'api.db'}", poolclass=NullPool)

    async def create_tables():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_tables())
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    notifier = Notifier(
        http=HttpTransport(transport=transport), mailer=FakeMailer(), settings=test_settings
    )

    monkeypatch.setattr(settings, "admin_api_key", API_KEY)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


def test_missing_api_key(client):
    response = client.post("/v1/notifications/send", json={"title": "A"})

    assert response.status_code == 401
    assert response.json() == {"error": {"code": 401, "message": "Missing API key"}}


def test_invalid_api_key(client):
    response = client.post("/v1/notifications/send", json={"title": "A"}, headers={"X-API-Key": "nope"})

    assert response.status_code == 401


def test_unconfigured_api_key_fails_closed(client, monkeypatch):
    monkeypatch.setattr(settings, "admin_api_key", "")

    response = client.post("/v1/notifications/send", json={"title": "A"}, headers=AUTH)

    assert response.status_code == 503


def test_root_is_public(client):
    assert client.get("/").json()["status"] == "ok"


# ---------------------------------------------------------------------------
# Sending
# ---------------------------------------------------------------------------


def test_send_with_supplied_config(client, transport):
    response = client.post(
        "/v1/notifications/test",
        json={"title": "A", "content": "B", "info": {"type": "bark", "barkPush": "dev"}},
        headers=AUTH,
    )

    assert response.status_code == 200
    assert response.json() == {"data": {"sent": True}}
    assert json.loads(transport.requests[0].content)["title"] == "A"


def test_send_without_channel_type(client, transport):
    response = client.post("/v1/notifications/test", json={"title": "A", "info": {}}, headers=AUTH)

    assert response.json() == {"data": {"sent": False}}
    assert transport.requests == []


def test_provider_rejection_is_bad_gateway(client):
    response = client.post(
        "/v1/notifications/test",
        json={"title": "A", "info": {"type": "bark", "barkPush": "broken"}},
        headers=AUTH,
    )

    assert response.status_code == 502
    assert response.json()["error"]["message"] == json.dumps(
        {"code": 400, "message": "failed to get device token"}
    )


def test_invalid_channel_config_is_bad_request(client, transport):
    response = client.post(
        "/v1/notifications/test",
        json={"title": "A", "info": {"type": "webhook", "webhookUrl": "https://x/y"}},
        headers=AUTH,
    )

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Url or Body must contain $title"
    assert transport.requests == []


def test_missing_title_is_validation_error(client):
    response = client.post("/v1/notifications/test", json={"info": {}}, headers=AUTH)

    assert response.status_code == 422
    assert response.json()["error"]["details"]


def test_system_channel_not_configured(client):
    response = client.post("/v1/notifications/send", json={"title": "A"}, headers=AUTH)

    assert response.json() == {"data": {"sent": False}}


# ---------------------------------------------------------------------------
# Per-user settings
# ---------------------------------------------------------------------------


def test_user_without_channel(client):
    response = client.get("/v1/users/alice/notification", headers=AUTH)

    assert response.status_code == 200
    assert response.json()["data"]["config"] == {}

    response = client.post("/v1/users/alice/notifications/send", json={"title": "A"}, headers=AUTH)
    assert response.json() == {"data": {"sent": False}}


def test_save_then_send_to_user(client, transport):
    info = {"type": "bark", "barkPush": "alice-device"}

    response = client.put("/v1/users/alice/notification", json=info, headers=AUTH)
    assert response.status_code == 200
    assert response.json()["data"]["config"] == info

    assert client.get("/v1/users/alice/notification", headers=AUTH).json()["data"]["config"] == info

    response = client.post(
        "/v1/users/alice/notifications/send", json={"title": "A", "content": "B"}, headers=AUTH
    )
    assert response.json() == {"data": {"sent": True}}
    assert str(transport.requests[0].url) == "https://api.day.app/alice-device"


def test_invalid_user_channel_is_not_saved(client):
    response = client.put(
        "/v1/users/bob/notification", json={"type": "carrierPigeon"}, headers=AUTH
    )

    assert response.status_code == 400
    assert client.get("/v1/users/bob/notification", headers=AUTH).json()["data"]["config"] == {}
