"""Blog post and contact message repositories."""


from promart.domain.content import BlogPost, ContactMessage
from promart.repositories.base import BaseRepository


class BlogPostRepository(BaseRepository[BlogPost]):
    model = BlogPost


class ContactMessageRepository(BaseRepository[ContactMessage]):
    model = ContactMessage
