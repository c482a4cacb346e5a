"""SQLAlchemy ORM model for moderated business listings.

``company_name`` / ``email`` / ``phone`` are a snapshot of the owner taken at
submission time and are never re-synced; reads that need current contact
details go through the ``owner`` relationship, which is eagerly loaded with
every listing.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from sqlalchemy import CheckConstraint, ForeignKey, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from promart.db.base import Base
from promart.domain.mixins import IdMixin, TimestampMixin


class ListingStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


LISTING_STATUSES = frozenset(s.value for s in ListingStatus)


class Listing(Base, IdMixin, TimestampMixin):
    __tablename__ = "listings"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')", name="ck_listings_status"
        ),
    )

    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Owner snapshot
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    key_features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    # Lists of {name, url, type, size, uploadedAt}
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)
    verification_documents: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, default=list, nullable=False
    )

    status: Mapped[str] = mapped_column(
        String(20), default=ListingStatus.PENDING.value, nullable=False, index=True
    )
    admin_comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Loaded with every listing so responses always carry live contact details
    owner: Mapped["Account"] = relationship(lazy="selectin")
