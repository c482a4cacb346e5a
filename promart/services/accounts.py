"""Account service: registration, login, and self-service profile changes."""


import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.config import settings
from promart.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from promart.core.security import create_access_token, hash_password, verify_password
from promart.domain.account import Account, Role
from promart.repositories.account import AccountRepository
from promart.schemas.account import LoginRequest, ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def check_password_strength(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


class AccountService:
    def __init__(self, session: AsyncSession):
        self._repo = AccountRepository(session)

    async def get_account(self, account_id: str) -> Account:
        account = await self._repo.get_by_id(account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    async def register(self, data: RegisterRequest) -> tuple[Account, str]:
        email = data.email.strip().lower()
        if await self._repo.get_by_email(email):
            raise ConflictError("User already exists")
        check_password_strength(data.password)

        role = data.role or Role.COMPANY.value
        if role not in (Role.COMPANY.value, Role.ADMIN.value):
            raise ValidationError(f"Invalid role '{role}'")
        if role == Role.ADMIN.value and not settings.allow_admin_registration:
            raise ForbiddenError("Admin registration is disabled")

        account = await self._repo.create(
            company_name=data.company_name,
            email=email,
            phone=data.phone,
            password_hash=hash_password(data.password),
            role=role,
            verified=True,
        )
        logger.info("Registered %s account %s", role, account.id)
        return account, create_access_token(account_id=account.id, role=account.role)

    async def login(self, data: LoginRequest) -> tuple[Account, str]:
        account = await self._repo.get_by_email(data.email)
        if not account or not verify_password(data.password, account.password_hash):
            raise UnauthorizedError("Invalid credentials")
        if not account.is_active:
            raise ForbiddenError("Account is deactivated")
        return account, create_access_token(account_id=account.id, role=account.role)

    async def update_profile(self, account: Account, data: ProfileUpdate) -> Account:
        if data.email:
            email = data.email.strip().lower()
            existing = await self._repo.get_by_email(email)
            if existing and existing.id != account.id:
                raise ConflictError("Email is already in use")
            account.email = email
        if data.phone:
            account.phone = data.phone
        if data.company_name:
            account.company_name = data.company_name
        return await self._repo.save(account)

    async def change_password(self, account: Account, current: str, new: str) -> None:
        if not verify_password(current, account.password_hash):
            raise ValidationError("Current password is incorrect")
        check_password_strength(new)
        account.password_hash = hash_password(new)
        account.password_changed_at = datetime.now(timezone.utc)
        await self._repo.save(account)
        logger.info("Password changed for account %s", account.id)
