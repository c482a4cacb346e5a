"""Listing repository with owner-aware reads and moderation aggregates."""


from sqlalchemy import case, delete, extract, func, select

from promart.domain.listing import Listing, ListingStatus
from promart.repositories.base import BaseRepository


class ListingRepository(BaseRepository[Listing]):
    model = Listing

    async def list_with_owner(self, status: str | None = None) -> list[Listing]:
        """Listings newest first; the owner relationship loads with them."""
        q = select(Listing)
        if status:
            q = q.where(Listing.status == status)
        q = q.order_by(Listing.created_at.desc())
        return list((await self._session.execute(q)).scalars().all())

    async def list_for_owner(self, owner_id: str) -> list[Listing]:
        return await self.list(filters={"owner_id": owner_id})

    async def delete_for_owner(self, owner_id: str) -> int:
        result = await self._session.execute(
            delete(Listing).where(Listing.owner_id == owner_id)
        )
        await self._session.flush()
        return result.rowcount

    async def monthly_counts(self) -> list[tuple[int, int, int, int]]:
        """Return ``(month, total, approved, rejected)`` rows ordered by month number."""
        month = extract("month", Listing.created_at)
        q = (
            select(
                month.label("month"),
                func.count(Listing.id),
                func.sum(case((Listing.status == ListingStatus.APPROVED.value, 1), else_=0)),
                func.sum(case((Listing.status == ListingStatus.REJECTED.value, 1), else_=0)),
            )
            .group_by(month)
            .order_by(month)
        )
        rows = (await self._session.execute(q)).all()
        return [(int(m), int(t), int(a or 0), int(r or 0)) for m, t, a, r in rows]
