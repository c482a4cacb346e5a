"""Blog and contact-form routes."""
from promart.core.config import settings

from conftest import auth_headers

POST = {
    "title": "Choosing a steel supplier",
    "excerpt": "Five things to check",
    "content": "Long form body",
    "author": "ProMart Team",
    "readTime": "4 min read",
    "category": "Guides",
}


async def test_blog_crud(client, admin):
    created = await client.post("/api/blogs", json=POST, headers=auth_headers(admin))
    assert created.status_code == 201
    post_id = created.json()["id"]
    assert created.json()["image"] == ""

    updated = await client.put(
        f"/api/blogs/{post_id}", json={"title": "Picking a steel supplier"},
        headers=auth_headers(admin),
    )
    assert updated.json()["blog"]["title"] == "Picking a steel supplier"
    assert updated.json()["blog"]["excerpt"] == POST["excerpt"]

    assert (await client.get(f"/api/blogs/{post_id}")).status_code == 200
    assert (await client.delete(f"/api/blogs/{post_id}", headers=auth_headers(admin))).status_code == 200
    assert (await client.get(f"/api/blogs/{post_id}")).status_code == 404


async def test_blog_category_filter(client, admin):
    await client.post("/api/blogs", json=POST, headers=auth_headers(admin))
    await client.post("/api/blogs", json=dict(POST, category="News"), headers=auth_headers(admin))

    assert len((await client.get("/api/blogs")).json()) == 2
    assert len((await client.get("/api/blogs?category=All")).json()) == 2
    news = (await client.get("/api/blogs?category=News")).json()
    assert [p["category"] for p in news] == ["News"]


async def test_blog_writes_are_admin_only(client, company):
    resp = await client.post("/api/blogs", json=POST, headers=auth_headers(company))
    assert resp.status_code == 403


async def test_contact_submit_and_moderate(client, admin, mailer, monkeypatch):
    monkeypatch.setattr(settings, "admin_email", "inbox@promart.test")

    resp = await client.post(
        "/api/contact",
        json={"name": "Dana", "email": "dana@buyer.test", "subject": "Bulk order", "message": "Hi"},
    )

    assert resp.status_code == 201
    contact = resp.json()["contact"]
    assert contact["status"] == "new"
    assert mailer.to("inbox@promart.test")[0][1] == "New Contact Message: Bulk order"

    resp = await client.patch(
        f"/api/contact/{contact['id']}", json={"status": "replied"}, headers=auth_headers(admin)
    )
    assert resp.json()["contact"]["status"] == "replied"

    listing = (await client.get("/api/contact", headers=auth_headers(admin))).json()
    assert [c["id"] for c in listing["contacts"]] == [contact["id"]]

    resp = await client.delete(f"/api/contact/{contact['id']}", headers=auth_headers(admin))
    assert resp.json()["success"] is True


async def test_contact_requires_all_fields(client):
    resp = await client.post("/api/contact", json={"name": "Dana", "email": ""})
    assert resp.status_code == 422
    assert resp.json()["error"]["message"] == "All fields are required."


async def test_contact_invalid_status(client, admin):
    created = (
        await client.post(
            "/api/contact",
            json={"name": "Dana", "email": "d@b.test", "subject": "s", "message": "m"},
        )
    ).json()["contact"]

    resp = await client.patch(
        f"/api/contact/{created['id']}", json={"status": "archived"}, headers=auth_headers(admin)
    )

    assert resp.status_code == 422
