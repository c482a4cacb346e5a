"""Notification inbox service (read side of the fan-out)."""


from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.exceptions import NotFoundError
from promart.domain.notification import Notification
from promart.repositories.notification import NotificationRepository


class NotificationService:
    def __init__(self, session: AsyncSession):
        self._repo = NotificationRepository(session)

    async def list_for_account(self, account_id: str) -> list[Notification]:
        return await self._repo.list_for_account(account_id)

    async def mark_read(self, notification_id: str, account_id: str) -> Notification:
        notification = await self._repo.get_for_account(notification_id, account_id)
        if not notification:
            raise NotFoundError("Notification", notification_id)
        notification.read = True
        return await self._repo.save(notification)

    async def mark_all_read(self, account_id: str) -> int:
        return await self._repo.mark_all_read(account_id)
