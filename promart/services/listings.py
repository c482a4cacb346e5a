"""Listing moderation workflow.

State machine::

    [none]   --submit-->  pending
    pending  --approve--> approved
    pending  --reject-->  rejected
    any      --edit-->    pending     (re-notifies admins every time)

Every transition commits the listing first and only then fans out
notifications. Each recipient gets two independent attempts (stored
notification, email); a failed attempt is rolled back and logged on its own
and never undoes the transition or reaches the caller.

Rule: No FastAPI here. Uploaded bytes are already stored; this module only
sees :class:`StoredUpload` tuples.
"""


import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from promart.domain.listing import LISTING_STATUSES, Listing, ListingStatus
from promart.domain.notification import NotificationKind
from promart.repositories.account import AccountRepository
from promart.repositories.listing import ListingRepository
from promart.repositories.notification import NotificationRepository
from promart.services.files import (
    StoredUpload,
    file_records,
    merge_files,
    parse_features,
    parse_kept_files,
)
from promart.services.mailer import Mailer

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "No reason provided"

_REQUIRED_FIELDS = ("title", "description", "category")
_OPTIONAL_FIELDS = ("location", "website")


def check_required_fields(fields: dict[str, Any]) -> None:
    missing = [f for f in _REQUIRED_FIELDS if not str(fields.get(f) or "").strip()]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


@dataclass(frozen=True)
class Recipient:
    account_id: str
    email: str | None


@dataclass(frozen=True)
class Delivery:
    """Outcome of one fan-out attempt; collected for logging only."""

    recipient_id: str
    channel: str  # "notification" | "email"
    ok: bool
    error: str | None = None


class ListingWorkflow:
    def __init__(self, session: AsyncSession, mailer: Mailer):
        self._session = session
        self._mailer = mailer
        self._listings = ListingRepository(session)
        self._accounts = AccountRepository(session)
        self._notifications = NotificationRepository(session)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, listing_id: str) -> Listing:
        listing = await self._listings.get_by_id(listing_id)
        if not listing:
            raise NotFoundError("Listing", listing_id)
        return listing

    async def ensure_owner(self, listing_id: str, actor_id: str) -> Listing:
        listing = await self.get(listing_id)
        if listing.owner_id != actor_id:
            raise ForbiddenError("Not authorized to edit this listing")
        return listing

    async def list_approved(self) -> list[Listing]:
        return await self._listings.list_with_owner(ListingStatus.APPROVED.value)

    async def list_for_owner(self, owner_id: str) -> list[Listing]:
        return await self._listings.list_for_owner(owner_id)

    async def list_for_admin(self, status: str | None = None) -> list[Listing]:
        if status in (None, "", "all"):
            return await self._listings.list_with_owner()
        if status not in LISTING_STATUSES:
            raise ValidationError(f"Invalid status filter '{status}'")
        return await self._listings.list_with_owner(status)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def submit(
        self,
        owner_id: str,
        fields: dict[str, Any],
        attachments: list[StoredUpload] | None = None,
        verification_documents: list[StoredUpload] | None = None,
    ) -> Listing:
        owner = await self._accounts.get_by_id(owner_id)
        if not owner:
            raise NotFoundError("Account", owner_id)

        check_required_fields(fields)

        # Client-supplied status / owner fields are never read
        listing = await self._listings.create(
            owner_id=owner.id,
            company_name=owner.company_name,
            email=owner.email,
            phone=owner.phone,
            title=str(fields["title"]).strip(),
            description=str(fields["description"]).strip(),
            category=str(fields["category"]).strip(),
            location=fields.get("location"),
            website=fields.get("website"),
            key_features=parse_features(fields.get("key_features")) or [],
            attachments=file_records(attachments),
            verification_documents=file_records(verification_documents),
            status=ListingStatus.PENDING.value,
        )
        await self._session.commit()
        logger.info("Listing %s submitted by %s", listing.id, owner.id)

        message = f"New listing pending approval: {listing.title}"
        await self._fan_out(
            self._recipients(await self._accounts.list_admins()),
            kind=NotificationKind.NEW_LISTING,
            listing_id=listing.id,
            message=message,
            subject="New listing pending approval",
            email_text=f"{message}\nSubmitted by: {listing.company_name}",
        )
        return await self._reload(listing)

    async def approve(self, listing_id: str) -> Listing:
        listing = await self._set_status(listing_id, ListingStatus.APPROVED)
        message = f'Your listing "{listing.title}" has been approved.'
        await self._notify_owner(listing, message, subject="Your listing has been approved")
        return await self._reload(listing)

    async def reject(self, listing_id: str, reason: str | None = None) -> Listing:
        reason = (reason or "").strip()
        listing = await self._set_status(
            listing_id, ListingStatus.REJECTED, comment=reason or None
        )
        message = (
            f'Your listing "{listing.title}" has been rejected. '
            f"Reason: {reason or DEFAULT_REJECTION_REASON}"
        )
        await self._notify_owner(listing, message, subject="Your listing has been rejected")
        return await self._reload(listing)

    async def edit(
        self,
        listing_id: str,
        actor_id: str,
        fields: dict[str, Any],
        attachments: list[StoredUpload] | None = None,
        verification_documents: list[StoredUpload] | None = None,
        existing_attachments: Any = None,
        existing_verification_documents: Any = None,
    ) -> Listing:
        listing = await self.ensure_owner(listing_id, actor_id)

        listing.attachments = merge_files(
            parse_kept_files(existing_attachments, listing.attachments or []),
            attachments,
        )
        listing.verification_documents = merge_files(
            parse_kept_files(existing_verification_documents, listing.verification_documents or []),
            verification_documents,
        )

        for name in _REQUIRED_FIELDS:
            value = fields.get(name)
            if value is not None and str(value).strip():
                setattr(listing, name, str(value).strip())
        for name in _OPTIONAL_FIELDS:
            if fields.get(name) is not None:
                setattr(listing, name, fields[name])
        features = parse_features(fields.get("key_features"))
        if features is not None:
            listing.key_features = features

        listing.status = ListingStatus.PENDING.value
        listing = await self._listings.save(listing)
        await self._session.commit()
        logger.info("Listing %s edited by owner; back to pending", listing.id)

        await self._fan_out(
            self._recipients(await self._accounts.list_admins()),
            kind=NotificationKind.RE_APPROVAL,
            listing_id=listing.id,
            message=(
                f'Listing "{listing.title}" was updated by {listing.company_name} '
                "and needs re-approval."
            ),
            subject="Listing updated - re-approval needed",
        )
        return await self._reload(listing)

    async def delete(self, listing_id: str) -> None:
        await self.get(listing_id)
        await self._notifications.detach_listing(listing_id)
        await self._listings.delete(listing_id)
        logger.info("Listing %s deleted", listing_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _set_status(
        self, listing_id: str, status: ListingStatus, comment: str | None = None
    ) -> Listing:
        listing = await self.get(listing_id)
        listing.status = status.value
        if comment:
            listing.admin_comment = comment
        listing = await self._listings.save(listing)
        await self._session.commit()
        logger.info("Listing %s -> %s", listing.id, status.value)
        return listing

    async def _notify_owner(self, listing: Listing, message: str, *, subject: str) -> None:
        owner = await self._accounts.get_by_id(listing.owner_id)
        email = owner.email if owner else listing.email
        await self._fan_out(
            [Recipient(listing.owner_id, email)],
            kind=NotificationKind.STATUS_UPDATE,
            listing_id=listing.id,
            message=message,
            subject=subject,
        )

    @staticmethod
    def _recipients(accounts: Iterable) -> list[Recipient]:
        return [Recipient(a.id, a.email) for a in accounts]

    async def _fan_out(
        self,
        recipients: list[Recipient],
        *,
        kind: NotificationKind,
        listing_id: str,
        message: str,
        subject: str,
        email_text: str | None = None,
    ) -> list[Delivery]:
        deliveries: list[Delivery] = []
        for recipient in recipients:
            deliveries.append(
                await self._store_notification(recipient, kind, message, listing_id)
            )
            deliveries.append(
                await self._send_email(recipient, subject, email_text or message)
            )

        failed = [d for d in deliveries if not d.ok]
        log = logger.warning if failed else logger.info
        log(
            "Fan-out %s for listing %s: %d recipient(s), %d/%d deliveries ok",
            kind.value, listing_id, len(recipients),
            len(deliveries) - len(failed), len(deliveries),
        )
        return deliveries

    async def _store_notification(
        self, recipient: Recipient, kind: NotificationKind, message: str, listing_id: str
    ) -> Delivery:
        try:
            await self._notifications.create(
                user_id=recipient.account_id,
                type=kind.value,
                message=message,
                listing_id=listing_id,
            )
            await self._session.commit()
        except Exception as exc:
            await self._session.rollback()
            logger.warning(
                "Notification for %s (listing %s) failed: %s",
                recipient.account_id, listing_id, exc,
            )
            return Delivery(recipient.account_id, "notification", False, str(exc))
        return Delivery(recipient.account_id, "notification", True)

    async def _send_email(self, recipient: Recipient, subject: str, text: str) -> Delivery:
        if not recipient.email:
            return Delivery(recipient.account_id, "email", False, "no email address")
        try:
            await self._mailer.send(recipient.email, subject, text)
        except Exception as exc:
            logger.warning("Email to %s failed: %s", recipient.email, exc)
            return Delivery(recipient.account_id, "email", False, str(exc))
        return Delivery(recipient.account_id, "email", True)

    async def _reload(self, listing: Listing) -> Listing:
        # A failed notification rolls the session back and expires everything
        await self._session.refresh(listing)
        return listing
