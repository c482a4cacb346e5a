"""Email one-time codes. Unlike listing notifications, delivery failure is an error here."""


import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.config import settings
from promart.core.exceptions import ServerError, ValidationError
from promart.repositories.otp import OtpRepository
from promart.services.mailer import Mailer

logger = logging.getLogger(__name__)


def generate_code() -> str:
    return f"{secrets.randbelow(900000) + 100000}"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class OtpService:
    def __init__(self, session: AsyncSession, mailer: Mailer):
        self._repo = OtpRepository(session)
        self._mailer = mailer

    async def send(self, email: str) -> None:
        email = (email or "").strip().lower()
        if not email:
            raise ValidationError("Email required")

        code = generate_code()
        await self._repo.delete_for_email(email)
        await self._repo.create(
            email=email,
            code=code,
            expires_at=datetime.now(timezone.utc) + timedelta(minutes=settings.otp_expires_minutes),
        )
        try:
            await self._mailer.send(
                email, "Your ProMart Verification Code", f"Your OTP is {code}"
            )
        except Exception as exc:
            logger.error("OTP email to %s failed: %s", email, exc)
            raise ServerError("Failed to send OTP") from exc
        logger.info("OTP sent to %s", email)

    async def verify(self, email: str, code: str) -> None:
        email = (email or "").strip().lower()
        record = await self._repo.find(email, (code or "").strip())
        if not record:
            raise ValidationError("Invalid OTP")
        if _as_utc(record.expires_at) < datetime.now(timezone.utc):
            raise ValidationError("OTP expired")
        await self._repo.delete_for_email(email)
