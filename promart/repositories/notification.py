"""Notification repository."""


from sqlalchemy import delete, select, update

from promart.domain.listing import Listing
from promart.domain.notification import Notification
from promart.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    async def list_for_account(self, account_id: str) -> list[Notification]:
        return await self.list(filters={"user_id": account_id})

    async def get_for_account(self, notification_id: str, account_id: str) -> Notification | None:
        result = await self._session.execute(
            select(Notification)
            .where(Notification.id == notification_id)
            .where(Notification.user_id == account_id)
        )
        return result.scalars().first()

    async def mark_all_read(self, account_id: str) -> int:
        result = await self._session.execute(
            update(Notification)
            .where(Notification.user_id == account_id)
            .where(Notification.read.is_(False))
            .values(read=True)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()
        return result.rowcount

    async def detach_listing(self, listing_id: str) -> None:
        """Null out references to a deleted listing; the message text is kept."""
        await self._session.execute(
            update(Notification)
            .where(Notification.listing_id == listing_id)
            .values(listing_id=None)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()

    async def detach_owner_listings(self, owner_id: str) -> None:
        listing_ids = select(Listing.id).where(Listing.owner_id == owner_id)
        await self._session.execute(
            update(Notification)
            .where(Notification.listing_id.in_(listing_ids))
            .values(listing_id=None)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.flush()

    async def delete_for_account(self, account_id: str) -> int:
        result = await self._session.execute(
            delete(Notification).where(Notification.user_id == account_id)
        )
        await self._session.flush()
        return result.rowcount
