"""Account / auth Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from promart.schemas.common import CamelModel

class RegisterRequest(CamelModel):
    company_name: str
    email: str
    phone: str
    password: str
    role: str | None = None

class LoginRequest(CamelModel):
    email: str
    password: str

class ProfileUpdate(CamelModel):
    email: str | None = None
    phone: str | None = None
    company_name: str | None = None

class PasswordChange(CamelModel):
    current_password: str
    new_password: str

class AccountOut(CamelModel):
    id: str
    company_name: str
    email: str
    phone: str
    role: str
    verified: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime

class AuthResponse(CamelModel):
    id: str
    company_name: str
    email: str
    phone: str
    role: str
    token: str

class ProfileUpdateResponse(CamelModel):
    message: str
    user: AccountOut

class PasswordChangeResponse(CamelModel):
    message: str
    requires_reauth: bool = True

class OtpSendRequest(CamelModel):
    email: str

class OtpVerifyRequest(CamelModel):
    email: str
    code: str
