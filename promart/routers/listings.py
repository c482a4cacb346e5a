"""Company-facing listing routes — submit, edit, and browse.

Routers only handle HTTP (multipart parsing, upload storage, response
shaping); the moderation rules live in :mod:`promart.services.listings`.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from promart.core.deps import get_current_account
from promart.core.uploads import UploadBatch
from promart.db.base import get_db
from promart.domain.account import Account
from promart.schemas.listing import ListingOut
from promart.services.listings import ListingWorkflow, check_required_fields
from promart.services.mailer import Mailer, get_mailer

router = APIRouter(prefix="/listings", tags=["Listings"])


def _svc(session: AsyncSession, mailer: Mailer) -> ListingWorkflow:
    return ListingWorkflow(session, mailer)


@router.post("", response_model=ListingOut, status_code=status.HTTP_201_CREATED)
async def create_listing(
    request: Request,
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    website: Optional[str] = Form(default=None),
    key_features: Optional[str] = Form(default=None, alias="keyFeatures"),
    attachments: Optional[list[UploadFile]] = File(default=None),
    verification_documents: Optional[list[UploadFile]] = File(default=None, alias="verificationDocuments"),
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Submit a listing for review. It always starts out pending."""
    fields = {
        "title": title,
        "description": description,
        "category": category,
        "location": location,
        "website": website,
        "key_features": key_features,
    }
    check_required_fields(fields)
    batch = UploadBatch(request)
    await batch.add("attachments", attachments)
    await batch.add("verificationDocuments", verification_documents)
    stored = await batch.write()
    try:
        listing = await _svc(session, mailer).submit(
            account.id,
            fields,
            attachments=stored["attachments"],
            verification_documents=stored["verificationDocuments"],
        )
    except Exception:
        await batch.discard()
        raise
    return ListingOut.model_validate(listing)


@router.get("/approved", response_model=list[ListingOut])
async def list_approved_listings(
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Public directory: approved listings with the owner's current contact details."""
    listings = await _svc(session, mailer).list_approved()
    return [ListingOut.model_validate(item) for item in listings]


@router.get("/my", response_model=list[ListingOut])
async def list_my_listings(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    listings = await _svc(session, mailer).list_for_owner(account.id)
    return [ListingOut.model_validate(item) for item in listings]


@router.put("/{listing_id}", response_model=ListingOut)
async def update_listing(
    listing_id: str,
    request: Request,
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    category: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    website: Optional[str] = Form(default=None),
    key_features: Optional[str] = Form(default=None, alias="keyFeatures"),
    existing_attachments: Optional[str] = Form(default=None, alias="existingAttachments"),
    existing_verification_documents: Optional[str] = Form(
        default=None, alias="existingVerificationDocuments"
    ),
    attachments: Optional[list[UploadFile]] = File(default=None),
    verification_documents: Optional[list[UploadFile]] = File(default=None, alias="verificationDocuments"),
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Owner edit: partial field update, kept-plus-new file merge, back to pending."""
    svc = _svc(session, mailer)
    # Ownership is checked before any bytes hit the upload directory
    await svc.ensure_owner(listing_id, account.id)
    fields = {
        "title": title,
        "description": description,
        "category": category,
        "location": location,
        "website": website,
        "key_features": key_features,
    }
    batch = UploadBatch(request)
    await batch.add("attachments", attachments)
    await batch.add("verificationDocuments", verification_documents)
    stored = await batch.write()
    try:
        listing = await svc.edit(
            listing_id,
            account.id,
            fields,
            attachments=stored["attachments"],
            verification_documents=stored["verificationDocuments"],
            existing_attachments=existing_attachments,
            existing_verification_documents=existing_verification_documents,
        )
    except Exception:
        await batch.discard()
        raise
    return ListingOut.model_validate(listing)
