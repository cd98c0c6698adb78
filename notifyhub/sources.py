"""Where channel configs come from: the system file or a per-user store."""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notifyhub.models.notification import NotificationSetting

logger = logging.getLogger(__name__)


def load_system_notify(path: Union[str, Path]) -> dict[str, Any]:
    """
    Read the system channel config from a JSON file.

    A missing, unreadable or malformed file means "not configured" and
    yields an empty mapping.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except FileNotFoundError:
        logger.debug("System notify file not found at %s", file_path)
        return {}
    except OSError as e:
        logger.warning("System notify file %s cannot be read: %s", file_path, e)
        return {}

    # UnicodeDecodeError is a ValueError
    try:
        data = json.loads(raw.decode("utf-8"))
    except ValueError:
        logger.warning("System notify file %s is not valid JSON", file_path)
        return {}
    return data if isinstance(data, dict) else {}


class NotificationStore(ABC):
    """Per-user channel config storage."""

    @abstractmethod
    async def get_notification_mode(self, user_id: str) -> dict[str, Any]:
        """Return the user's ``{type, ...params}`` config, or ``{}``."""
        ...


class SqlNotificationStore(NotificationStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_setting(self, user_id: str) -> Optional[NotificationSetting]:
        result = await self.db.execute(
            select(NotificationSetting).where(NotificationSetting.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_notification_mode(self, user_id: str) -> dict[str, Any]:
        setting = await self.get_setting(user_id)
        return dict(setting.config) if setting and setting.config else {}

    async def set_notification_mode(self, user_id: str, info: dict[str, Any]) -> NotificationSetting:
        setting = await self.get_setting(user_id)
        if setting is None:
            setting = NotificationSetting(user_id=user_id, config=info)
            self.db.add(setting)
        else:
            setting.config = info
        await self.db.commit()
        await self.db.refresh(setting)
        return setting
