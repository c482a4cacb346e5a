"""Account repository."""


from sqlalchemy import select

from promart.domain.account import Account, Role
from promart.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    model = Account

    async def get_by_email(self, email: str) -> Account | None:
        result = await self._session.execute(
            select(Account).where(Account.email == email.strip().lower())
        )
        return result.scalars().first()

    async def list_admins(self) -> list[Account]:
        """All admin accounts in a stable order (oldest first)."""
        return await self.list(
            order_by="created_at", order="asc", filters={"role": Role.ADMIN.value}
        )
