"""SQLAlchemy ORM model for company and admin accounts."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from promart.db.base import Base
from promart.domain.mixins import IdMixin, TimestampMixin


class Role(str, enum.Enum):
    COMPANY = "company"
    ADMIN = "admin"


class Account(Base, IdMixin, TimestampMixin):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("role IN ('company', 'admin')", name="ck_accounts_role"),
    )

    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Set at registration; there is no role-change operation.
    role: Mapped[str] = mapped_column(String(20), default=Role.COMPANY.value, nullable=False, index=True)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    password_changed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
