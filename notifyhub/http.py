"""Outbound HTTP transport for channel adapters."""

import logging
from typing import Optional

import httpx

from notifyhub.config import Settings

logger = logging.getLogger(__name__)


class HttpTransport:
    """
    Builds short-lived httpx clients for provider requests.

    Every client carries the same fixed timeout and a single connection-level
    retry. A proxy is only set up for the channels that ask for one.
    Passing ``transport`` replaces the network layer entirely (tests use
    ``httpx.MockTransport``); the proxy argument is then ignored.
    """

    def __init__(
        self,
        timeout: float = 10,
        retries: int = 1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.retries = retries
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpTransport":
        return cls(timeout=settings.http_timeout, retries=settings.http_retries)

    def client(self, proxy: Optional[str] = None) -> httpx.AsyncClient:
        if self._transport is not None:
            transport = self._transport
        else:
            if proxy:
                logger.debug("Routing request through proxy %s", proxy)
            transport = httpx.AsyncHTTPTransport(retries=self.retries, proxy=proxy)
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=transport,
        )
