"""Send a built ChannelPayload and interpret the provider reply."""

import logging
from typing import Any, Callable, Union

import httpx

from notifyhub.channels import ChannelPayload, SendContext
from notifyhub.channels.markers import AnyOf, SuccessMarker
from notifyhub.exceptions import ChannelValidationError, ProviderError, TransportError

logger = logging.getLogger(__name__)

Marker = Union[SuccessMarker, AnyOf]


async def request(ctx: SendContext, payload: ChannelPayload) -> httpx.Response:
    """
    Issue a single request.

    Raises:
        ChannelValidationError: a header value cannot be sent (not ASCII)
        TransportError: the request never got a reply (connect, timeout, bad URL)
        ProviderError: the reply status is not 2xx; message is the raw body
    """
    try:
        async with ctx.http.client(proxy=payload.proxy) as client:
            response = await client.request(
                method=payload.method,
                url=payload.url,
                headers=payload.headers or None,
                **payload.body_kwargs(),
            )
    except UnicodeEncodeError as e:
        # httpx encodes header values as ASCII while building the request
        raise ChannelValidationError(f"Header value is not ASCII: {e}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(str(e) or e.__class__.__name__) from e

    if not response.is_success:
        logger.warning(
            "Request to %s returned status %s: %s",
            response.request.url.host, response.status_code, response.text[:200],
        )
        raise ProviderError(response.text, status_code=response.status_code)
    return response


def read_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        raise ProviderError(response.text, status_code=response.status_code)


def read_text(response: httpx.Response) -> str:
    return response.text


async def deliver(
    ctx: SendContext,
    payload: ChannelPayload,
    marker: Marker,
    channel: str,
    parse: Callable[[httpx.Response], Any] = read_json,
) -> bool:
    """Send ``payload`` and require ``marker`` to hold on the parsed reply."""
    response = await request(ctx, payload)
    reply = parse(response)
    if not marker(reply):
        logger.warning("Channel %s rejected notification (expected %s)", channel, marker)
        raise ProviderError(response.text, status_code=response.status_code)

    logger.debug("Successfully sent notification via %s", channel)
    return True
