"""Blog and contact-form routes. Reads and contact submission are public."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.deps import require_admin
from promart.db.base import get_db
from promart.schemas.common import MessageResponse
from promart.schemas.content import (
    BlogAction,
    BlogCreate,
    BlogOut,
    BlogUpdate,
    ContactAction,
    ContactCreate,
    ContactListResponse,
    ContactOut,
    ContactStatusUpdate,
    SuccessMessage,
)
from promart.services.content import BlogService, ContactService
from promart.services.mailer import Mailer, get_mailer

blogs_router = APIRouter(prefix="/blogs", tags=["Blog"])
contact_router = APIRouter(prefix="/contact", tags=["Contact"])


# ------------------------------------------------------------------
# /blogs
# ------------------------------------------------------------------

@blogs_router.get("", response_model=list[BlogOut])
async def list_posts(
    category: Optional[str] = Query(default=None, description="Category, or 'All'"),
    session: AsyncSession = Depends(get_db),
):
    posts = await BlogService(session).list_posts(category)
    return [BlogOut.model_validate(p) for p in posts]


@blogs_router.get("/{post_id}", response_model=BlogOut)
async def get_post(post_id: str, session: AsyncSession = Depends(get_db)):
    return BlogOut.model_validate(await BlogService(session).get_post(post_id))


@blogs_router.post(
    "",
    response_model=BlogOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_post(body: BlogCreate, session: AsyncSession = Depends(get_db)):
    return BlogOut.model_validate(await BlogService(session).create_post(body))


@blogs_router.put("/{post_id}", response_model=BlogAction, dependencies=[Depends(require_admin)])
async def update_post(post_id: str, body: BlogUpdate, session: AsyncSession = Depends(get_db)):
    post = await BlogService(session).update_post(post_id, body)
    return {"message": "Blog updated", "blog": BlogOut.model_validate(post)}


@blogs_router.delete("/{post_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_post(post_id: str, session: AsyncSession = Depends(get_db)):
    await BlogService(session).delete_post(post_id)
    return {"message": "Blog deleted"}


# ------------------------------------------------------------------
# /contact
# ------------------------------------------------------------------

@contact_router.post("", response_model=ContactAction, status_code=status.HTTP_201_CREATED)
async def submit_contact(
    body: ContactCreate,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    contact = await ContactService(session, mailer).submit(body)
    return {"message": "Message received successfully!", "contact": ContactOut.model_validate(contact)}


@contact_router.get("", response_model=ContactListResponse, dependencies=[Depends(require_admin)])
async def list_contacts(
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    contacts = await ContactService(session, mailer).list_messages()
    return {"contacts": [ContactOut.model_validate(c) for c in contacts]}


@contact_router.patch("/{contact_id}", response_model=ContactAction, dependencies=[Depends(require_admin)])
async def update_contact_status(
    contact_id: str,
    body: ContactStatusUpdate,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    contact = await ContactService(session, mailer).update_status(contact_id, body.status)
    return {"message": "Status updated", "contact": ContactOut.model_validate(contact)}


@contact_router.delete("/{contact_id}", response_model=SuccessMessage, dependencies=[Depends(require_admin)])
async def delete_contact(
    contact_id: str,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    await ContactService(session, mailer).delete_message(contact_id)
    return {"message": "Message deleted"}
