import httpcore
import httpx
import pytest

from notifyhub.config import Settings
from notifyhub.http import HttpTransport


def test_from_settings_defaults():
    transport = HttpTransport.from_settings(Settings())

    assert transport.timeout == 10
    assert transport.retries == 1


@pytest.mark.asyncio
async def test_client_without_proxy():
    async with HttpTransport(timeout=10, retries=1).client() as client:
        assert client.timeout == httpx.Timeout(10)
        assert client.follow_redirects is True
        pool = client._transport._pool
        assert not isinstance(pool, httpcore.AsyncHTTPProxy)
        assert pool._retries == 1


@pytest.mark.asyncio
async def test_client_with_proxy():
    async with HttpTransport(retries=1).client(proxy="http://user:pw@10.0.0.2:7890") as client:
        pool = client._transport._pool
        assert isinstance(pool, httpcore.AsyncHTTPProxy)
        assert pool._proxy_url.host == b"10.0.0.2"
        assert pool._proxy_url.port == 7890
        assert pool._retries == 1


@pytest.mark.asyncio
async def test_injected_transport_ignores_proxy():
    injected = httpx.MockTransport(lambda request: httpx.Response(200))

    async with HttpTransport(transport=injected).client(proxy="http://10.0.0.2:7890") as client:
        assert client._transport is injected
