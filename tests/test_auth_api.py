"""Registration, login, bearer-token gate, and company self-service profile."""
from promart.core.config import settings

from conftest import PASSWORD, auth_headers

NEW_COMPANY = {
    "companyName": "Initech",
    "email": "Sales@Initech.test",
    "phone": "+1-555-0199",
    "password": "s3cure-pass",
}


async def test_register_and_login(client):
    resp = await client.post("/api/auth/register", json=NEW_COMPANY)

    assert resp.status_code == 201
    body = resp.json()
    assert body["email"] == "sales@initech.test"
    assert body["role"] == "company"
    assert body["token"]

    login = await client.post(
        "/api/auth/login", json={"email": "sales@initech.test", "password": "s3cure-pass"}
    )
    assert login.status_code == 200
    profile = await client.get(
        "/api/companies/profile", headers={"Authorization": f"Bearer {login.json()['token']}"}
    )
    assert profile.json()["companyName"] == "Initech"


async def test_register_duplicate_email(client, company):
    resp = await client.post("/api/auth/register", json=dict(NEW_COMPANY, email=company.email))
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "User already exists"


async def test_register_short_password(client):
    resp = await client.post("/api/auth/register", json=dict(NEW_COMPANY, password="short"))
    assert resp.status_code == 422


async def test_admin_registration_gated(client, monkeypatch):
    monkeypatch.setattr(settings, "allow_admin_registration", False)
    resp = await client.post("/api/auth/register", json=dict(NEW_COMPANY, role="admin"))
    assert resp.status_code == 403

    monkeypatch.setattr(settings, "allow_admin_registration", True)
    resp = await client.post("/api/auth/register", json=dict(NEW_COMPANY, role="admin"))
    assert resp.status_code == 201
    assert resp.json()["role"] == "admin"


async def test_login_wrong_password(client, company):
    resp = await client.post(
        "/api/auth/login", json={"email": company.email, "password": "not-it"}
    )
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid credentials"


async def test_garbage_token_rejected(client):
    resp = await client.get(
        "/api/companies/profile", headers={"Authorization": "Bearer not.a.token"}
    )
    assert resp.status_code == 401


async def test_update_profile(client, company):
    resp = await client.put(
        "/api/companies/update-profile",
        json={"phone": "+1-555-0111", "companyName": "Acme Steel Works"},
        headers=auth_headers(company),
    )

    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["phone"] == "+1-555-0111"
    assert user["companyName"] == "Acme Steel Works"
    assert user["email"] == company.email


async def test_update_profile_email_taken(client, company, other_company):
    resp = await client.put(
        "/api/companies/update-profile",
        json={"email": other_company.email},
        headers=auth_headers(company),
    )
    assert resp.status_code == 409


async def test_change_password(client, company):
    resp = await client.put(
        "/api/companies/change-password",
        json={"currentPassword": PASSWORD, "newPassword": "brand-new-pass"},
        headers=auth_headers(company),
    )

    assert resp.status_code == 200
    assert resp.json()["requiresReauth"] is True
    old = await client.post("/api/auth/login", json={"email": company.email, "password": PASSWORD})
    new = await client.post(
        "/api/auth/login", json={"email": company.email, "password": "brand-new-pass"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


async def test_change_password_wrong_current(client, company):
    resp = await client.put(
        "/api/companies/change-password",
        json={"currentPassword": "nope-nope", "newPassword": "brand-new-pass"},
        headers=auth_headers(company),
    )
    assert resp.status_code == 422
    assert resp.json()["error"]["message"] == "Current password is incorrect"


async def test_public_listing_shows_updated_owner_contact(client, company, admin):
    created = await client.post(
        "/api/listings",
        data={"title": "Rebar", "description": "TMT bars", "category": "Construction"},
        headers=auth_headers(company),
    )
    await client.put(
        f"/api/admin/listings/{created.json()['id']}/approve", headers=auth_headers(admin)
    )
    await client.put(
        "/api/companies/update-profile",
        json={"email": "sales@acme.test"},
        headers=auth_headers(company),
    )

    listing = (await client.get("/api/listings/approved")).json()[0]

    assert listing["email"] == "owner@acme.test"
    assert listing["company"]["email"] == "sales@acme.test"


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
