from notifyhub.models.base import Base
from notifyhub.models.notification import NotificationSetting

__all__ = ["Base", "NotificationSetting"]
