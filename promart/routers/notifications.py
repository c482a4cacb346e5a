"""Notification inbox routes for the signed-in account."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.deps import get_current_account
from promart.db.base import get_db
from promart.domain.account import Account
from promart.schemas.notification import MarkAllReadResponse, NotificationOut
from promart.services.notifications import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=list[NotificationOut])
async def list_notifications(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_db),
):
    items = await NotificationService(session).list_for_account(account.id)
    return [NotificationOut.model_validate(n) for n in items]


@router.patch("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_db),
):
    updated = await NotificationService(session).mark_all_read(account.id)
    return {"message": "All notifications marked as read", "updated": updated}


@router.patch("/{notification_id}/read", response_model=NotificationOut)
async def mark_read(
    notification_id: str,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_db),
):
    notification = await NotificationService(session).mark_read(notification_id, account.id)
    return NotificationOut.model_validate(notification)
