"""Chronocat (QQ Red Protocol) channel adapter.

``chronocatQQ`` lists recipients as ``user_id=<n>`` and ``group_id=<n>``
fragments, e.g. ``user_id=10001;user_id=10002;group_id=20001``. Users are
tried before groups, one at a time, and delivery stops at the first
recipient that accepts the message.
"""

import logging
import re
from typing import Optional

from notifyhub.channels import ChannelPayload, NotificationMessage, SendContext
from notifyhub.channels.sender import request
from notifyhub.exceptions import NotifyError, ProviderError
from notifyhub.schemas.channel import ChronocatConfig

logger = logging.getLogger(__name__)

USER_CHAT = 1
GROUP_CHAT = 2

_USER_RE = re.compile(r"user_id=(\d+)")
_GROUP_RE = re.compile(r"group_id=(\d+)")


def parse_recipients(recipients: str) -> list[tuple[int, str]]:
    """Return ``(chat_type, peer_id)`` pairs, users first."""
    users = [(USER_CHAT, uid) for uid in _USER_RE.findall(recipients)]
    groups = [(GROUP_CHAT, gid) for gid in _GROUP_RE.findall(recipients)]
    return users + groups


def format_chronocat(
    config: ChronocatConfig,
    message: NotificationMessage,
    chat_type: int,
    peer_id: str,
) -> ChannelPayload:
    return ChannelPayload(
        method="POST",
        url=f"{config.chronocat_url}/api/message/send",
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.chronocat_token}",
        },
        json={
            "peer": {"chatType": chat_type, "peerUin": peer_id},
            "elements": [
                {
                    "elementType": 1,
                    "textElement": {"content": f"{message.title}\n\n{message.content}"},
                }
            ],
        },
    )


async def send_chronocat(
    message: NotificationMessage, config: ChronocatConfig, ctx: SendContext
) -> bool:
    """
    Returns False when no recipient is configured. If every recipient
    fails, the last failure is raised.
    """
    last_error: Optional[NotifyError] = None

    for chat_type, peer_id in parse_recipients(config.chronocat_qq):
        payload = format_chronocat(config, message, chat_type, peer_id)
        try:
            response = await request(ctx, payload)
        except NotifyError as e:
            logger.warning("Chronocat delivery to %s failed: %s", peer_id, e.message[:200])
            last_error = e
            continue

        if response.status_code == 200:
            logger.debug("Successfully sent notification via chronocat to %s", peer_id)
            return True
        last_error = ProviderError(response.text, status_code=response.status_code)

    if last_error is not None:
        raise last_error
    return False
