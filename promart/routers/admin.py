"""Admin routes — listing moderation, dashboard counts, and account management.

Every route here sits behind :func:`require_admin`.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.deps import require_admin
from promart.db.base import get_db
from promart.domain.account import Account
from promart.schemas.account import AccountOut, ProfileUpdateResponse
from promart.schemas.common import MessageResponse
from promart.schemas.listing import (
    AdminListingsResponse,
    DashboardStats,
    ListingAction,
    ListingOut,
    MonthlyStat,
    RejectRequest,
)
from promart.services.admin import AdminService
from promart.services.listings import ListingWorkflow
from promart.services.mailer import Mailer, get_mailer

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


# ------------------------------------------------------------------
# Dashboard
# ------------------------------------------------------------------

@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    return await AdminService(session, mailer).stats()


@router.get("/listings/monthly", response_model=list[MonthlyStat])
async def monthly_listing_stats(
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Per-month listing counts for the dashboard chart."""
    return await AdminService(session, mailer).monthly_stats()


# ------------------------------------------------------------------
# Listing moderation
# ------------------------------------------------------------------

@router.get("/listings", response_model=AdminListingsResponse)
async def list_all_listings(
    filter_status: Optional[str] = Query(default=None, alias="status", description="pending|approved|rejected|all"),
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    listings = await ListingWorkflow(session, mailer).list_for_admin(filter_status)
    return {
        "success": True,
        "count": len(listings),
        "listings": [ListingOut.model_validate(item) for item in listings],
    }


@router.put("/listings/{listing_id}/approve", response_model=ListingAction)
@router.put("/listings/{listing_id}/approved", response_model=ListingAction, include_in_schema=False)
async def approve_listing(
    listing_id: str,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    listing = await ListingWorkflow(session, mailer).approve(listing_id)
    return {"message": "Listing approved", "listing": ListingOut.model_validate(listing)}


@router.put("/listings/{listing_id}/reject", response_model=ListingAction)
async def reject_listing(
    listing_id: str,
    body: Optional[RejectRequest] = None,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Reject with an optional reason (older clients send it as ``comment``)."""
    reason = (body.reason or body.comment) if body else None
    listing = await ListingWorkflow(session, mailer).reject(listing_id, reason)
    return {"message": "Listing rejected", "listing": ListingOut.model_validate(listing)}


@router.delete("/listings/{listing_id}", response_model=MessageResponse)
async def delete_listing(
    listing_id: str,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    await ListingWorkflow(session, mailer).delete(listing_id)
    return {"message": "Listing deleted successfully"}


# ------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------

@router.get("/companies", response_model=list[AccountOut])
async def list_accounts(
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    accounts = await AdminService(session, mailer).list_accounts()
    return [AccountOut.model_validate(a) for a in accounts]


@router.patch("/deactivate/{account_id}", response_model=ProfileUpdateResponse)
async def deactivate_account(
    account_id: str,
    admin: Account = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    account = await AdminService(session, mailer).set_active(account_id, False, admin.id)
    return {"message": "User deactivated", "user": AccountOut.model_validate(account)}


@router.patch("/reactivate/{account_id}", response_model=ProfileUpdateResponse)
async def reactivate_account(
    account_id: str,
    admin: Account = Depends(require_admin),
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    account = await AdminService(session, mailer).set_active(account_id, True, admin.id)
    return {"message": "User reactivated", "user": AccountOut.model_validate(account)}


@router.patch("/reset-password/{account_id}", response_model=MessageResponse)
async def reset_password(
    account_id: str,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    await AdminService(session, mailer).reset_password(account_id)
    return {"message": "Password reset; a temporary password was emailed to the user"}


@router.delete("/companies/{account_id}", response_model=MessageResponse)
async def delete_company(
    account_id: str,
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    await AdminService(session, mailer).delete_company(account_id)
    return {"message": "Company and its listings deleted successfully"}
