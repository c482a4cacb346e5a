"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  account.py       — company / admin identities
  listing.py       — moderated listings (status + owner snapshot + file metadata)
  notification.py  — per-account fan-out records (write-once except `read`)
  content.py       — blog posts and contact messages
  otp.py           — one-time email verification codes
  mixins.py        — Shared IdMixin, TimestampMixin
"""

from promart.domain.account import Account, Role
from promart.domain.content import BlogPost, ContactMessage
from promart.domain.listing import Listing, ListingStatus
from promart.domain.notification import Notification, NotificationKind
from promart.domain.otp import OtpCode

__all__ = [
    "Account",
    "BlogPost",
    "ContactMessage",
    "Listing",
    "ListingStatus",
    "Notification",
    "NotificationKind",
    "OtpCode",
    "Role",
]
