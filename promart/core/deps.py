"""FastAPI dependencies for the caller's identity and the admin-role gate."""


from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.exceptions import ForbiddenError, UnauthorizedError
from promart.core.security import decode_access_token
from promart.db.base import get_db
from promart.domain.account import Account
from promart.repositories.account import AccountRepository

_bearer = HTTPBearer(auto_error=False)


async def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    session: AsyncSession = Depends(get_db),
) -> Account:
    """Resolve the bearer token to an active account."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("No token, authorization denied")

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise UnauthorizedError("Invalid or expired token")

    account = await AccountRepository(session).get_by_id(str(payload["sub"]))
    if not account:
        raise UnauthorizedError("User not found")
    if not account.is_active:
        raise ForbiddenError("Account is deactivated")
    return account


async def require_admin(account: Account = Depends(get_current_account)) -> Account:
    if not account.is_admin:
        raise ForbiddenError("Access denied: Admins only")
    return account
