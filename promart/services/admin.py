"""Admin dashboard service: counts, account moderation, and cascading company deletion."""


import logging
import secrets

from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.exceptions import NotFoundError, ValidationError
from promart.core.security import hash_password
from promart.domain.account import Account, Role
from promart.domain.listing import ListingStatus
from promart.repositories.account import AccountRepository
from promart.repositories.listing import ListingRepository
from promart.repositories.notification import NotificationRepository
from promart.services.mailer import Mailer

logger = logging.getLogger(__name__)

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class AdminService:
    def __init__(self, session: AsyncSession, mailer: Mailer):
        self._accounts = AccountRepository(session)
        self._listings = ListingRepository(session)
        self._notifications = NotificationRepository(session)
        self._mailer = mailer

    async def stats(self) -> dict[str, int]:
        return {
            "total_companies": await self._accounts.count({"role": Role.COMPANY.value}),
            "total_listings": await self._listings.count(),
            "approved_listings": await self._listings.count({"status": ListingStatus.APPROVED.value}),
            "pending_listings": await self._listings.count({"status": ListingStatus.PENDING.value}),
            "rejected_listings": await self._listings.count({"status": ListingStatus.REJECTED.value}),
        }

    async def monthly_stats(self) -> list[dict]:
        return [
            {"month": MONTHS[month - 1], "listings": total, "approved": approved, "rejected": rejected}
            for month, total, approved, rejected in await self._listings.monthly_counts()
        ]

    async def list_accounts(self) -> list[Account]:
        return await self._accounts.list()

    async def _get(self, account_id: str) -> Account:
        account = await self._accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    async def set_active(self, account_id: str, active: bool, acting_admin_id: str) -> Account:
        account = await self._get(account_id)
        if not active and account.id == acting_admin_id:
            raise ValidationError("You cannot deactivate yourself")
        account.is_active = active
        account = await self._accounts.save(account)
        logger.info("Account %s %s", account.id, "reactivated" if active else "deactivated")
        return account

    async def reset_password(self, account_id: str) -> None:
        account = await self._get(account_id)
        temporary = secrets.token_urlsafe(9)
        account.password_hash = hash_password(temporary)
        await self._accounts.save(account)
        try:
            await self._mailer.send(
                account.email,
                "Your ProMart password has been reset",
                f"An administrator reset your password.\n\nTemporary password: {temporary}\n\n"
                "Please log in and change it right away.",
            )
        except Exception as exc:
            logger.warning("Password reset email to %s failed: %s", account.email, exc)

    async def delete_company(self, account_id: str) -> None:
        account = await self._get(account_id)
        await self._notifications.detach_owner_listings(account.id)
        removed = await self._listings.delete_for_owner(account.id)
        await self._notifications.delete_for_account(account.id)
        await self._accounts.delete(account.id)
        logger.info("Deleted account %s and %d listing(s)", account.id, removed)
