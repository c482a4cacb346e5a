"""Auth, OTP, and company self-service profile routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.deps import get_current_account
from promart.db.base import get_db
from promart.domain.account import Account
from promart.schemas.account import (
    AccountOut,
    AuthResponse,
    LoginRequest,
    OtpSendRequest,
    OtpVerifyRequest,
    PasswordChange,
    PasswordChangeResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    RegisterRequest,
)
from promart.schemas.common import MessageResponse
from promart.services.accounts import AccountService
from promart.services.mailer import Mailer, get_mailer
from promart.services.otp import OtpService

auth_router = APIRouter(prefix="/auth", tags=["Auth"])
otp_router = APIRouter(prefix="/otp", tags=["Auth"])
companies_router = APIRouter(prefix="/companies", tags=["Companies"])


def _auth_body(account: Account, token: str) -> dict:
    return {
        "id": account.id,
        "company_name": account.company_name,
        "email": account.email,
        "phone": account.phone,
        "role": account.role,
        "token": token,
    }


# ------------------------------------------------------------------
# /auth
# ------------------------------------------------------------------

@auth_router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, session: AsyncSession = Depends(get_db)):
    account, token = await AccountService(session).register(body)
    return _auth_body(account, token)


@auth_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, session: AsyncSession = Depends(get_db)):
    account, token = await AccountService(session).login(body)
    return _auth_body(account, token)


# ------------------------------------------------------------------
# /otp
# ------------------------------------------------------------------

@otp_router.post("/send", response_model=MessageResponse)
async def send_otp(
    body: OtpSendRequest,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    await OtpService(session, mailer).send(body.email)
    return {"message": "OTP sent successfully"}


@otp_router.post("/verify", response_model=MessageResponse)
async def verify_otp(
    body: OtpVerifyRequest,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    await OtpService(session, mailer).verify(body.email, body.code)
    return {"message": "OTP verified successfully"}


# ------------------------------------------------------------------
# /companies
# ------------------------------------------------------------------

@companies_router.get("/profile", response_model=AccountOut)
async def get_profile(account: Account = Depends(get_current_account)):
    return AccountOut.model_validate(account)


@companies_router.put("/update-profile", response_model=ProfileUpdateResponse)
async def update_profile(
    body: ProfileUpdate,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_db),
):
    account = await AccountService(session).update_profile(account, body)
    return {"message": "Profile updated successfully", "user": AccountOut.model_validate(account)}


@companies_router.put("/change-password", response_model=PasswordChangeResponse)
async def change_password(
    body: PasswordChange,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_db),
):
    await AccountService(session).change_password(account, body.current_password, body.new_password)
    return {"message": "Password updated successfully. Please login again.", "requires_reauth": True}
