"""Generic webhook channel adapter."""

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.format_body import (
    format_body,
    parse_body,
    parse_headers,
    replace_placeholders,
)
from notifyhub.channels.sender import request
from notifyhub.exceptions import ChannelValidationError
from notifyhub.schemas.channel import WebhookConfig


def format_webhook(config: WebhookConfig, message: NotificationMessage) -> ChannelPayload:
    """
    Format a notification for a user-defined webhook.

    Config expects:
        - webhookUrl: URL template; placeholders are percent-encoded
        - webhookBody: body template, ``key: value`` per line or raw text
        - webhookHeaders: ``Key: value`` per line, no placeholders
        - webhookMethod: HTTP method, defaults to POST
        - webhookContentType: application/json, application/x-www-form-urlencoded,
          multipart/form-data or text/plain

    Raises:
        ChannelValidationError: neither the URL nor the body references $title,
            or a header is not ASCII
    """
    url_template = config.webhook_url or ""
    body_template = config.webhook_body or ""
    if "$title" not in url_template and "$title" not in body_template:
        raise ChannelValidationError("Url or Body must contain $title")

    headers = parse_headers(config.webhook_headers)
    for key, value in headers.items():
        if not (key + value).isascii():
            raise ChannelValidationError(f"Header {key} must be ASCII")

    body = parse_body(
        body_template,
        config.webhook_content_type,
        lambda value: replace_placeholders(value, message.title, message.content),
    )

    return ChannelPayload(
        method=(config.webhook_method or "POST").upper(),
        url=replace_placeholders(url_template, message.title, message.content, url=True),
        headers=headers,
        **format_body(config.webhook_content_type, body),
    )


async def send_webhook(message: NotificationMessage, config: WebhookConfig, ctx: SendContext) -> bool:
    # Any 2xx counts as delivered; request() raises for everything else.
    await request(ctx, format_webhook(config, message))
    return True
