"""Demo data for offline runs (``DATABASE_URL=sqlite+aiosqlite:///:memory:``).

Seeding goes through the same repositories as production writes and only runs
against an empty accounts table.
"""


import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from promart.core.security import hash_password
from promart.db.base import Base
from promart.domain.account import Role
from promart.domain.listing import ListingStatus
from promart.repositories.account import AccountRepository
from promart.repositories.content import BlogPostRepository
from promart.repositories.listing import ListingRepository

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"


async def create_schema(engine: AsyncEngine) -> None:
    import promart.domain  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_demo_data(session_factory: async_sessionmaker) -> None:
    async with session_factory() as session:
        accounts = AccountRepository(session)
        if await accounts.count():
            logger.info("Demo seed skipped: accounts already present")
            return

        password_hash = hash_password(DEMO_PASSWORD)
        await accounts.create(
            company_name="ProMart Admin",
            email="admin@promart.local",
            phone="+1-555-0100",
            password_hash=password_hash,
            role=Role.ADMIN.value,
            verified=True,
        )
        company = await accounts.create(
            company_name="TechCorp Solutions",
            email="contact@techcorp.local",
            phone="+1-555-0123",
            password_hash=password_hash,
            role=Role.COMPANY.value,
            verified=True,
        )

        listings = ListingRepository(session)
        for title, category, status in (
            ("Enterprise Software Development", "Technology", ListingStatus.APPROVED),
            ("Cloud Migration Services", "Technology", ListingStatus.PENDING),
        ):
            await listings.create(
                owner_id=company.id,
                company_name=company.company_name,
                email=company.email,
                phone=company.phone,
                title=title,
                description=f"{title} for mid-size and enterprise clients.",
                category=category,
                location="San Francisco, CA",
                website="https://techcorp.local",
                key_features=["24/7 support", "Certified engineers"],
                attachments=[],
                verification_documents=[],
                status=status.value,
            )

        await BlogPostRepository(session).create(
            title="How to get your listing approved",
            excerpt="What reviewers look for in a ProMart listing.",
            content="Complete descriptions, a working website, and verification documents.",
            author="ProMart Team",
            read_time="3 min read",
            category="Guides",
        )
        await session.commit()
        logger.info("Seeded demo data (password for demo accounts: %s)", DEMO_PASSWORD)
