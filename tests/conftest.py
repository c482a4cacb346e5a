import os
import tempfile

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="promart-uploads-"))
os.environ.setdefault("EMAIL_BACKEND", "console")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import promart.domain  # noqa: F401
from promart.core.security import create_access_token, hash_password
from promart.db.base import Base, build_engine, get_db
from promart.domain.account import Account, Role
from promart.main import app
from promart.services.mailer import EmailSendError, get_mailer

PASSWORD = "password123"
PASSWORD_HASH = hash_password(PASSWORD)


class RecordingMailer:
    """Mailer double: records every message, or raises when ``fail`` is set."""

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = []

    async def send(self, to_email, subject, text):
        if self.fail:
            raise EmailSendError("smtp unavailable")
        self.sent.append((to_email, subject, text))

    def to(self, email):
        return [m for m in self.sent if m[0] == email]


def auth_headers(account):
    token = create_access_token(account_id=account.id, role=account.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
async def client(session_factory, mailer):
    async def _get_db():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
    app.dependency_overrides.clear()


async def _make_account(session_factory, *, company_name, email, role=Role.COMPANY.value, is_active=True):
    async with session_factory() as s:
        account = Account(
            company_name=company_name,
            email=email,
            phone="+1-555-0100",
            password_hash=PASSWORD_HASH,
            role=role,
            verified=True,
            is_active=is_active,
        )
        s.add(account)
        await s.commit()
        return account


@pytest.fixture
async def company(session_factory):
    return await _make_account(
        session_factory, company_name="Acme Steel", email="owner@acme.test"
    )


@pytest.fixture
async def other_company(session_factory):
    return await _make_account(
        session_factory, company_name="Globex", email="info@globex.test"
    )


@pytest.fixture
async def admin(session_factory):
    return await _make_account(
        session_factory, company_name="ProMart Admin", email="admin1@promart.test",
        role=Role.ADMIN.value,
    )


@pytest.fixture
async def second_admin(session_factory):
    return await _make_account(
        session_factory, company_name="ProMart Admin 2", email="admin2@promart.test",
        role=Role.ADMIN.value,
    )


@pytest.fixture
async def admins(admin, second_admin):
    return [admin, second_admin]
