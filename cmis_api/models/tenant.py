### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Tenant Model -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Tenant Model

Represents an administrative scope: a county, or the national HQ.
Users, role assignments and applications all belong to a tenant.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, String, Text

from cmis_api.database import Base, new_id


class TenantType(str, Enum):
    """Kind of administrative scope"""

    COUNTY = "COUNTY"
    NATIONAL = "NATIONAL"


class Tenant(Base):
    """
    Tenant model - a county or the national headquarters.

    Tenants are never deleted once referenced; "deleting" a county only
    clears is_active.

    Examples:
        - "Nairobi County" (COUNTY, code 047)
        - "State Department for Cooperatives - National HQ" (NATIONAL)
    """

    __tablename__ = "tenants"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(150), nullable=False)
    type = Column(String(20), default=TenantType.COUNTY.value, nullable=False)
    county_code = Column(String(10), nullable=True, index=True)
    contact_email = Column(String(255), nullable=True)
    contact_phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Tenant(id={self.id}, name='{self.name}', type='{self.type}')>"
