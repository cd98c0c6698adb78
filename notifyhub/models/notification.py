"""Per-user notification channel settings."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from notifyhub.models.base import Base, TimestampMixin


class NotificationSetting(Base, TimestampMixin):
    __tablename__ = "notification_settings"

    user_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    # {"type": ..., ...params} exactly as submitted
    config: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
