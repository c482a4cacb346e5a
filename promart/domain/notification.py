"""SQLAlchemy ORM model for per-account notifications (write-once except ``read``)."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from promart.db.base import Base
from promart.domain.mixins import IdMixin


class NotificationKind(str, enum.Enum):
    NEW_LISTING = "new_listing"
    STATUS_UPDATE = "status_update"
    RE_APPROVAL = "re_approval"


class Notification(Base, IdMixin):
    __tablename__ = "notifications"
    __table_args__ = (
        CheckConstraint(
            "type IN ('new_listing', 'status_update', 're_approval')",
            name="ck_notifications_type",
        ),
    )

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    listing_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("listings.id", ondelete="SET NULL"), nullable=True, index=True
    )
    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # No updated_at: only the read flag ever changes
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
