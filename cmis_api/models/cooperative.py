### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Cooperative Model -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Cooperative Model

The registered business entity created when an application is approved.
Exactly one cooperative exists per approved application.

Registration numbers have the form COOP-<year>-<5 digit sequence>, with the
sequence counted per tenant per year.
"""

import re
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)

from cmis_api.database import Base, new_id

REGISTRATION_NUMBER_PATTERN = re.compile(r"^COOP-\d{4}-\d{5}$")


def registration_number_prefix(year: int) -> str:
    """Prefix shared by every registration number issued in ``year``"""
    return f"COOP-{year}-"


def format_registration_number(year: int, sequence: int) -> str:
    """
    Format a registration number.

    Example:
        format_registration_number(2025, 4) -> "COOP-2025-00004"
    """
    return f"{registration_number_prefix(year)}{sequence:05d}"


class Cooperative(Base):
    """Registered cooperative society"""

    __tablename__ = "cooperatives"

    id = Column(String(36), primary_key=True, default=new_id)
    registration_number = Column(String(20), nullable=False)
    name = Column(String(200), nullable=False)
    type_id = Column(String(36), ForeignKey("cooperative_types.id"), nullable=True)
    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False)
    application_id = Column(
        String(36), ForeignKey("registration_applications.id"), nullable=True, unique=True
    )
    status = Column(String(30), default="REGISTERED", nullable=False)
    registration_date = Column(Date, default=date.today, nullable=False)

    # Contact (copied from the application)
    address = Column(Text, nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)

    total_members = Column(Integer, default=0, nullable=False)
    total_share_capital = Column(Numeric(14, 2), default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("tenant_id", "registration_number", name="uq_cooperatives_tenant_regno"),
    )

    def __repr__(self):
        return f"<Cooperative(id={self.id}, registration_number='{self.registration_number}')>"
