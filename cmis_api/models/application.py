### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Registration Application Model -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Registration Application Model

A request to form a cooperative. Applications are created upstream (the
applicant's registration wizard) in DRAFT or SUBMITTED state and from then
on are only changed by the workflow engine. They are never deleted.

Status machine:
    DRAFT -> SUBMITTED -> UNDER_REVIEW
    SUBMITTED | UNDER_REVIEW -> APPROVED | REJECTED | ADDITIONAL_INFO_REQUIRED
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Column,
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from cmis_api.database import Base, new_id


class ApplicationStatus(str, Enum):
    """Registration application status"""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    ADDITIONAL_INFO_REQUIRED = "ADDITIONAL_INFO_REQUIRED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# Transitions are only permitted from these states
ACTIONABLE_STATUSES = (ApplicationStatus.SUBMITTED, ApplicationStatus.UNDER_REVIEW)

# Uploaded document columns and their display labels
DOCUMENT_FIELDS = {
    "bylaws_url": "Cooperative By-laws",
    "member_list_url": "Member List",
    "minutes_url": "Meeting Minutes",
    "id_copies_url": "ID Copies",
}


class CooperativeType(Base):
    """Lookup of cooperative types (e.g. SACCO, Dairy, Housing)"""

    __tablename__ = "cooperative_types"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False, unique=True)
    category = Column(String(50), nullable=True)

    def __repr__(self):
        return f"<CooperativeType(id={self.id}, name='{self.name}')>"


class RegistrationApplication(Base):
    """Cooperative-formation request moving through the review workflow"""

    __tablename__ = "registration_applications"

    id = Column(String(36), primary_key=True, default=new_id)
    application_number = Column(String(30), nullable=False, unique=True)

    # Proposed cooperative
    proposed_name = Column(String(200), nullable=False)
    type_id = Column(String(36), ForeignKey("cooperative_types.id"), nullable=True)
    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False)
    applicant_user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    proposed_members = Column(Integer, default=0, nullable=False)
    proposed_share_capital = Column(Numeric(14, 2), nullable=True)
    primary_activity = Column(String(200), nullable=True)
    operating_area = Column(String(200), nullable=True)

    # Contact
    address = Column(Text, nullable=True)
    contact_person = Column(String(200), nullable=False)
    contact_phone = Column(String(50), nullable=False)
    contact_email = Column(String(255), nullable=True)

    # Document storage paths (null = not uploaded)
    bylaws_url = Column(String(500), nullable=True)
    member_list_url = Column(String(500), nullable=True)
    minutes_url = Column(String(500), nullable=True)
    id_copies_url = Column(String(500), nullable=True)

    # Workflow
    status = Column(
        SAEnum(ApplicationStatus, name="application_status", native_enum=False, length=30),
        default=ApplicationStatus.DRAFT,
        nullable=False,
    )
    submitted_at = Column(DateTime, nullable=True)
    reviewed_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    review_notes = Column(Text, nullable=True)
    approved_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    rejection_reason = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    cooperative_type = relationship("CooperativeType")
    tenant = relationship("Tenant")

    __table_args__ = (
        Index("ix_applications_tenant_status", "tenant_id", "status"),
        Index("ix_applications_submitted_created", "submitted_at", "created_at"),
    )

    def __repr__(self):
        return (
            f"<RegistrationApplication(id={self.id}, number='{self.application_number}', "
            f"status={self.status})>"
        )

    @property
    def is_actionable(self) -> bool:
        """Whether a reviewer may approve/reject/request info"""
        return self.status in ACTIONABLE_STATUSES
