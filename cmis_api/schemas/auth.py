### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Authentication Schemas -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Authentication Schemas

Login and session-profile models.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login request body"""
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Login response with session token"""
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class ProfileRole(BaseModel):
    """An active role held by the signed-in user"""
    role: str
    tenant_id: str
    tenant_name: str | None = None


class ProfileResponse(BaseModel):
    """Signed-in user's profile and acting role"""
    id: str
    email: str
    full_name: str
    tenant_id: str
    acting_role: str | None = None
    acting_tenant_id: str | None = None
    roles: list[ProfileRole] = []
