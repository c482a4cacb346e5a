"""Notification Pydantic schemas."""


from datetime import datetime

from promart.schemas.common import CamelModel

class NotificationOut(CamelModel):
    id: str
    user_id: str
    type: str  # new_listing | status_update | re_approval
    message: str
    listing_id: str | None = None
    read: bool
    created_at: datetime

class MarkAllReadResponse(CamelModel):
    message: str
    updated: int
