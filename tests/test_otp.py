"""Email one-time codes."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from promart.core.exceptions import ServerError, ValidationError
from promart.domain.otp import OtpCode
from promart.services.otp import OtpService, generate_code

from conftest import RecordingMailer


def _code_from(mailer, email):
    [(_, _, text)] = mailer.to(email)
    return text.rsplit(" ", 1)[-1]


def test_generate_code_is_six_digits():
    for _ in range(50):
        code = generate_code()
        assert len(code) == 6 and code.isdigit()


async def test_send_and_verify_over_http(client, mailer):
    resp = await client.post("/api/otp/send", json={"email": "Buyer@Example.test"})
    assert resp.status_code == 200

    code = _code_from(mailer, "buyer@example.test")
    resp = await client.post(
        "/api/otp/verify", json={"email": "buyer@example.test", "code": code}
    )
    assert resp.status_code == 200

    # Codes are single use
    resp = await client.post(
        "/api/otp/verify", json={"email": "buyer@example.test", "code": code}
    )
    assert resp.status_code == 422
    assert resp.json()["error"]["message"] == "Invalid OTP"


async def test_resend_replaces_previous_code(session, mailer):
    svc = OtpService(session, mailer)
    await svc.send("buyer@example.test")
    await svc.send("buyer@example.test")

    rows = (await session.execute(select(OtpCode))).scalars().all()
    assert len(rows) == 1


async def test_expired_code(session, mailer):
    svc = OtpService(session, mailer)
    await svc.send("buyer@example.test")
    record = (await session.execute(select(OtpCode))).scalars().one()
    record.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    await session.commit()

    with pytest.raises(ValidationError, match="OTP expired"):
        await svc.verify("buyer@example.test", record.code)


async def test_send_requires_email(session, mailer):
    with pytest.raises(ValidationError):
        await OtpService(session, mailer).send("  ")


async def test_delivery_failure_is_an_error(session):
    with pytest.raises(ServerError):
        await OtpService(session, RecordingMailer(fail=True)).send("buyer@example.test")
