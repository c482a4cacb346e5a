"""Blog and contact-form services. Plain CRUD for the marketing site."""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.config import settings
from promart.core.exceptions import NotFoundError, ValidationError
from promart.domain.content import CONTACT_STATUSES, BlogPost, ContactMessage
from promart.repositories.content import BlogPostRepository, ContactMessageRepository
from promart.schemas.content import BlogCreate, BlogUpdate, ContactCreate
from promart.services.mailer import Mailer

logger = logging.getLogger(__name__)


class BlogService:
    def __init__(self, session: AsyncSession):
        self._repo = BlogPostRepository(session)

    async def list_posts(self, category: str | None = None) -> list[BlogPost]:
        filters = {"category": category} if category and category != "All" else None
        return await self._repo.list(filters=filters)

    async def get_post(self, post_id: str) -> BlogPost:
        post = await self._repo.get_by_id(post_id)
        if not post:
            raise NotFoundError("Blog", post_id)
        return post

    async def create_post(self, data: BlogCreate) -> BlogPost:
        return await self._repo.create(**data.model_dump(exclude_none=True))

    async def update_post(self, post_id: str, data: BlogUpdate) -> BlogPost:
        _ = await self.get_post(post_id)  # raises 404 if missing
        updated = await self._repo.update(
            post_id, **data.model_dump(exclude_none=True, exclude_unset=True)
        )
        return updated  # type: ignore[return-value]

    async def delete_post(self, post_id: str) -> None:
        if not await self._repo.delete(post_id):
            raise NotFoundError("Blog", post_id)


class ContactService:
    def __init__(self, session: AsyncSession, mailer: Mailer):
        self._repo = ContactMessageRepository(session)
        self._mailer = mailer

    async def submit(self, data: ContactCreate) -> ContactMessage:
        values = {
            "name": (data.name or "").strip(),
            "email": (data.email or "").strip(),
            "subject": (data.subject or "").strip(),
            "message": (data.message or "").strip(),
        }
        if not all(values.values()):
            raise ValidationError("All fields are required.")
        contact = await self._repo.create(**values)

        if settings.admin_email:
            try:
                await self._mailer.send(
                    settings.admin_email,
                    f"New Contact Message: {contact.subject}",
                    f"You have a new message from {contact.name} ({contact.email}):\n\n{contact.message}",
                )
            except Exception as exc:
                logger.warning("Failed to send admin contact email: %s", exc)
        return contact

    async def list_messages(self) -> list[ContactMessage]:
        return await self._repo.list()

    async def update_status(self, contact_id: str, status: str) -> ContactMessage:
        if status not in CONTACT_STATUSES:
            raise ValidationError("Invalid status value")
        if not await self._repo.get_by_id(contact_id):
            raise NotFoundError("Contact", contact_id)
        return await self._repo.update(contact_id, status=status)  # type: ignore[return-value]

    async def delete_message(self, contact_id: str) -> None:
        if not await self._repo.delete(contact_id):
            raise NotFoundError("Message", contact_id)
