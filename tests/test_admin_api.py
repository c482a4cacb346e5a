"""Admin moderation routes, dashboard counts, and account management."""
from conftest import PASSWORD, auth_headers

FORM = {"title": "Solar Panels", "description": "Mono PERC modules", "category": "Energy"}


async def _submit(client, account, **extra):
    resp = await client.post(
        "/api/listings", data=dict(FORM, **extra), headers=auth_headers(account)
    )
    assert resp.status_code == 201
    return resp.json()


async def test_admin_routes_require_admin_role(client, company):
    resp = await client.get("/api/admin/listings", headers=auth_headers(company))
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Access denied: Admins only"


async def test_admin_routes_require_token(client):
    resp = await client.get("/api/admin/stats")
    assert resp.status_code == 401


async def test_approve_and_owner_inbox(client, company, admin, mailer):
    listing = await _submit(client, company)
    mailer.sent.clear()

    resp = await client.put(
        f"/api/admin/listings/{listing['id']}/approve", headers=auth_headers(admin)
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Listing approved"
    assert body["listing"]["status"] == "approved"
    assert [m[0] for m in mailer.sent] == ["owner@acme.test"]

    inbox = (await client.get("/api/notifications", headers=auth_headers(company))).json()
    assert inbox[0]["type"] == "status_update"
    assert inbox[0]["listingId"] == listing["id"]
    assert inbox[0]["message"] == 'Your listing "Solar Panels" has been approved.'


async def test_approved_alias_path(client, company, admin):
    listing = await _submit(client, company)

    resp = await client.put(
        f"/api/admin/listings/{listing['id']}/approved", headers=auth_headers(admin)
    )

    assert resp.status_code == 200
    assert resp.json()["listing"]["status"] == "approved"


async def test_reject_with_reason(client, company, admin):
    listing = await _submit(client, company)

    resp = await client.put(
        f"/api/admin/listings/{listing['id']}/reject",
        json={"reason": "Blurry certificate"},
        headers=auth_headers(admin),
    )

    assert resp.status_code == 200
    assert resp.json()["listing"]["status"] == "rejected"
    assert resp.json()["listing"]["adminComment"] == "Blurry certificate"
    inbox = (await client.get("/api/notifications", headers=auth_headers(company))).json()
    assert inbox[0]["message"].endswith("Reason: Blurry certificate")


async def test_reject_accepts_comment_key(client, company, admin):
    listing = await _submit(client, company)

    resp = await client.put(
        f"/api/admin/listings/{listing['id']}/reject",
        json={"comment": "Duplicate"},
        headers=auth_headers(admin),
    )

    assert resp.json()["listing"]["adminComment"] == "Duplicate"


async def test_reject_without_body(client, company, admin):
    listing = await _submit(client, company)

    resp = await client.put(
        f"/api/admin/listings/{listing['id']}/reject", headers=auth_headers(admin)
    )

    assert resp.status_code == 200
    inbox = (await client.get("/api/notifications", headers=auth_headers(company))).json()
    assert inbox[0]["message"].endswith("Reason: No reason provided")


async def test_approve_unknown_listing(client, admin):
    resp = await client.put("/api/admin/listings/nope/approve", headers=auth_headers(admin))
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


async def test_list_with_status_filter(client, company, admin):
    first = await _submit(client, company)
    await _submit(client, company, title="Wind Turbines")
    await client.put(f"/api/admin/listings/{first['id']}/approve", headers=auth_headers(admin))

    everything = (await client.get("/api/admin/listings", headers=auth_headers(admin))).json()
    pending = (
        await client.get("/api/admin/listings?status=pending", headers=auth_headers(admin))
    ).json()

    assert everything["success"] is True
    assert everything["count"] == 2
    assert pending["count"] == 1
    assert pending["listings"][0]["title"] == "Wind Turbines"
    assert pending["listings"][0]["company"]["companyName"] == "Acme Steel"


async def test_list_with_invalid_status(client, admin):
    resp = await client.get("/api/admin/listings?status=archived", headers=auth_headers(admin))
    assert resp.status_code == 422


async def test_stats_and_monthly(client, company, other_company, admin):
    first = await _submit(client, company)
    second = await _submit(client, other_company, title="Batteries")
    await _submit(client, company, title="Inverters")
    await client.put(f"/api/admin/listings/{first['id']}/approve", headers=auth_headers(admin))
    await client.put(f"/api/admin/listings/{second['id']}/reject", headers=auth_headers(admin))

    stats = (await client.get("/api/admin/stats", headers=auth_headers(admin))).json()
    assert stats == {
        "totalCompanies": 2,
        "totalListings": 3,
        "approvedListings": 1,
        "pendingListings": 1,
        "rejectedListings": 1,
    }

    monthly = (await client.get("/api/admin/listings/monthly", headers=auth_headers(admin))).json()
    assert len(monthly) == 1
    assert monthly[0]["listings"] == 3
    assert monthly[0]["approved"] == 1
    assert monthly[0]["rejected"] == 1


async def test_delete_listing(client, company, admin):
    listing = await _submit(client, company)

    resp = await client.delete(f"/api/admin/listings/{listing['id']}", headers=auth_headers(admin))

    assert resp.status_code == 200
    mine = (await client.get("/api/listings/my", headers=auth_headers(company))).json()
    assert mine == []


async def test_deactivate_blocks_login_and_reactivate_restores(client, company, admin):
    resp = await client.patch(f"/api/admin/deactivate/{company.id}", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.json()["user"]["isActive"] is False

    login = await client.post(
        "/api/auth/login", json={"email": company.email, "password": PASSWORD}
    )
    assert login.status_code == 403
    assert (await client.get("/api/listings/my", headers=auth_headers(company))).status_code == 403

    resp = await client.patch(f"/api/admin/reactivate/{company.id}", headers=auth_headers(admin))
    assert resp.json()["user"]["isActive"] is True


async def test_admin_cannot_deactivate_self(client, admin):
    resp = await client.patch(f"/api/admin/deactivate/{admin.id}", headers=auth_headers(admin))
    assert resp.status_code == 422


async def test_reset_password_emails_temporary_password(client, company, admin, mailer):
    resp = await client.patch(f"/api/admin/reset-password/{company.id}", headers=auth_headers(admin))

    assert resp.status_code == 200
    [(_, _, text)] = mailer.to(company.email)
    temporary = text.split("Temporary password: ")[1].split()[0]
    login = await client.post(
        "/api/auth/login", json={"email": company.email, "password": temporary}
    )
    assert login.status_code == 200


async def test_delete_company_removes_listings(client, company, other_company, admin):
    await _submit(client, company)
    await _submit(client, other_company, title="Kept")

    resp = await client.delete(f"/api/admin/companies/{company.id}", headers=auth_headers(admin))

    assert resp.status_code == 200
    remaining = (await client.get("/api/admin/listings", headers=auth_headers(admin))).json()
    assert [item["title"] for item in remaining["listings"]] == ["Kept"]
    companies = (await client.get("/api/admin/companies", headers=auth_headers(admin))).json()
    assert company.id not in [c["id"] for c in companies]
