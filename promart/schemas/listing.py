"""Listing Pydantic schemas: response models and the moderation request body."""


from datetime import datetime

from pydantic import AliasChoices, Field

from promart.schemas.common import CamelModel

class FileMeta(CamelModel):
    name: str | None = None
    url: str | None = None
    type: str | None = None
    size: int | None = None
    uploaded_at: str | None = None

class OwnerSummary(CamelModel):
    """Live owner contact details (not the snapshot stored on the listing)."""

    id: str
    company_name: str
    email: str
    phone: str

class ListingOut(CamelModel):
    id: str
    company_id: str = Field(
        validation_alias=AliasChoices("owner_id", "companyId"), serialization_alias="companyId"
    )
    company_name: str
    email: str | None = None
    phone: str | None = None
    title: str
    description: str
    category: str
    location: str | None = None
    website: str | None = None
    key_features: list[str] = Field(default_factory=list)
    attachments: list[FileMeta] = Field(default_factory=list)
    verification_documents: list[FileMeta] = Field(default_factory=list)
    status: str
    admin_comment: str | None = None
    company: OwnerSummary | None = Field(
        default=None,
        validation_alias=AliasChoices("owner", "company"),
        serialization_alias="company",
    )
    created_at: datetime
    updated_at: datetime

class ListingAction(CamelModel):
    message: str
    listing: ListingOut

class AdminListingsResponse(CamelModel):
    success: bool = True
    count: int
    listings: list[ListingOut]

class RejectRequest(CamelModel):
    reason: str | None = None
    comment: str | None = None

class DashboardStats(CamelModel):
    total_companies: int
    total_listings: int
    approved_listings: int
    pending_listings: int
    rejected_listings: int

class MonthlyStat(CamelModel):
    month: str
    listings: int
    approved: int
    rejected: int
