### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Tenant Schemas -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Tenant Schemas

Pydantic models for county (tenant) management endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class TenantCreate(BaseModel):
    """Create a new county tenant"""
    name: str = Field(..., min_length=1, max_length=200, description="County name")
    county_code: str = Field(..., min_length=1, max_length=10, description="County code (e.g. '047')")
    contact_email: str | None = Field(None, max_length=255)
    contact_phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)


class TenantUpdate(BaseModel):
    """Update tenant fields"""
    name: str | None = Field(None, min_length=1, max_length=200)
    county_code: str | None = Field(None, min_length=1, max_length=10)
    contact_email: str | None = Field(None, max_length=255)
    contact_phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    is_active: bool | None = None


class TenantResponse(BaseModel):
    """Tenant response"""
    id: str
    name: str
    type: str
    county_code: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
    address: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None
    user_count: int | None = None

    class Config:
        from_attributes = True
