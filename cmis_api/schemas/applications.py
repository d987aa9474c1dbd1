### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Registration Application Schemas -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Registration Application Schemas

Pydantic models for the application registry and review workflow.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from cmis_api.models import ApplicationStatus


class ApplicationResponse(BaseModel):
    """Application row as shown in the review queue"""
    id: str
    application_number: str
    proposed_name: str
    type_id: str | None = None
    type_name: str | None = None
    tenant_id: str
    tenant_name: str | None = None
    applicant_user_id: str | None = None
    proposed_members: int
    proposed_share_capital: Decimal | None = None
    primary_activity: str | None = None
    operating_area: str | None = None
    contact_person: str
    contact_phone: str
    contact_email: str | None = None
    status: ApplicationStatus
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    approved_at: datetime | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class DocumentLink(BaseModel):
    """Uploaded document with its time-limited link"""
    field: str  # e.g. "bylaws_url"
    label: str
    path: str | None = None
    uploaded: bool
    url: str | None = Field(None, description="Signed link; null when not uploaded or unavailable")


class ApplicationDetailResponse(ApplicationResponse):
    """Full application with review fields and document links"""
    address: str | None = None
    reviewed_by: str | None = None
    review_notes: str | None = None
    approved_by: str | None = None
    rejection_reason: str | None = None
    updated_at: datetime | None = None
    documents: list[DocumentLink] = []


class RejectRequest(BaseModel):
    """Reject an application"""
    reason: str = Field("", max_length=5000, description="Reason shown to the applicant")


class RequestInfoRequest(BaseModel):
    """Ask the applicant for more information"""
    notes: str = Field("", max_length=5000, description="What the applicant must provide")


class CooperativeResponse(BaseModel):
    """Registered cooperative"""
    id: str
    registration_number: str
    name: str
    type_id: str | None = None
    tenant_id: str
    application_id: str
    status: str
    registration_date: date
    address: str | None = None
    email: str | None = None
    phone: str | None = None
    total_members: int
    total_share_capital: Decimal
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class CooperativeTypeResponse(BaseModel):
    """Cooperative type lookup entry"""
    id: str
    name: str
    category: str | None = None

    class Config:
        from_attributes = True
