"""Routes for sending notifications and managing per-user channel settings."""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notifyhub.auth import require_api_key
from notifyhub.channels.registry import validate_channel_info
from notifyhub.database import get_db
from notifyhub.dispatcher import Notifier
from notifyhub.response import single_response
from notifyhub.schemas.notification import (
    NotificationResult,
    NotificationSend,
    NotificationSettingResponse,
    NotificationTest,
)
from notifyhub.sources import SqlNotificationStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"], dependencies=[Depends(require_api_key)])


@lru_cache
def get_notifier() -> Notifier:
    return Notifier()


# ---------------------------------------------------------------------------
# Sending
# ---------------------------------------------------------------------------

@router.post("/notifications/test", summary="Send through a supplied channel config")
async def test_notification(body: NotificationTest, notifier: Notifier = Depends(get_notifier)):
    sent = await notifier.test_notify(body.info, body.title, body.content)
    return single_response(NotificationResult(sent=sent))


@router.post("/notifications/send", summary="Send through the system channel")
async def send_system_notification(
    body: NotificationSend, notifier: Notifier = Depends(get_notifier)
):
    sent = await notifier.external_notify(body.title, body.content)
    return single_response(NotificationResult(sent=sent))


@router.post("/users/{user_id}/notifications/send", summary="Send through a user's channel")
async def send_user_notification(
    user_id: str,
    body: NotificationSend,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
):
    store = SqlNotificationStore(db)
    sent = await notifier.user_notify(body.title, body.content, store, user_id)
    return single_response(NotificationResult(sent=sent))


# ---------------------------------------------------------------------------
# Per-user channel settings
# ---------------------------------------------------------------------------

@router.get("/users/{user_id}/notification", summary="Get a user's channel config")
async def get_user_notification(user_id: str, db: AsyncSession = Depends(get_db)):
    setting = await SqlNotificationStore(db).get_setting(user_id)
    if setting is None:
        return single_response(NotificationSettingResponse(user_id=user_id, config={}))
    return single_response(NotificationSettingResponse.model_validate(setting))


@router.put("/users/{user_id}/notification", summary="Save a user's channel config")
async def put_user_notification(user_id: str, info: dict, db: AsyncSession = Depends(get_db)):
    # Raises ChannelValidationError (400) before anything is stored
    validate_channel_info(info)

    setting = await SqlNotificationStore(db).set_notification_mode(user_id, info)
    logger.info("Saved %s channel for user %s", info.get("type"), user_id)
    return single_response(NotificationSettingResponse.model_validate(setting))
