"""Pydantic schemas for the notification API."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class NotificationSend(BaseModel):
    title: str = Field(..., description="Notification title")
    content: str = Field("", description="Notification body")


class NotificationTest(NotificationSend):
    info: dict[str, Any] = Field(..., description="Channel config: {type, ...params}")


class NotificationResult(BaseModel):
    sent: bool


class NotificationSettingResponse(BaseModel):
    user_id: str
    config: dict[str, Any]
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
