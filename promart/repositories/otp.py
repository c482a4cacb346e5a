"""One-time code repository."""


from sqlalchemy import delete, select

from promart.domain.otp import OtpCode
from promart.repositories.base import BaseRepository


class OtpRepository(BaseRepository[OtpCode]):
    model = OtpCode

    async def find(self, email: str, code: str) -> OtpCode | None:
        result = await self._session.execute(
            select(OtpCode).where(OtpCode.email == email).where(OtpCode.code == code)
        )
        return result.scalars().first()

    async def delete_for_email(self, email: str) -> None:
        await self._session.execute(delete(OtpCode).where(OtpCode.email == email))
        await self._session.flush()
