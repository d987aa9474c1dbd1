### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - User Directory Schemas -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
User Directory Schemas

Pydantic models for user and role-assignment endpoints.
"""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from cmis_api.models import RoleName


def _lower_email(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def _check_role(value: str | None) -> str | None:
    if value is not None and value not in RoleName.__members__:
        raise ValueError(f"Unknown role '{value}'")
    return value


# ========================================
# User Schemas
# ========================================

class UserCreate(BaseModel):
    """Provision a new user with an initial role"""
    email: EmailStr = Field(..., description="Login email")
    full_name: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=50)
    id_number: str = Field(..., min_length=1, max_length=50, description="National ID number")
    tenant_id: str = Field(..., min_length=1, description="Home tenant")
    role: str = Field(..., description="Initial role granted within the home tenant")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _lower_email(v)

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        return _check_role(v)


class UserUpdate(BaseModel):
    """Update user profile fields"""
    email: EmailStr | None = None
    full_name: str | None = Field(None, min_length=1, max_length=200)
    phone: str | None = Field(None, max_length=50)
    id_number: str | None = Field(None, max_length=50)
    tenant_id: str | None = Field(None, min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return _lower_email(v)


class UserRoleResponse(BaseModel):
    """Role assignment"""
    id: str
    user_id: str
    role: str
    tenant_id: str
    tenant_name: str | None = None
    is_active: bool
    assigned_at: datetime
    assigned_by: str | None = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """User with role assignments (active and inactive)"""
    id: str
    email: str
    full_name: str
    phone: str | None = None
    id_number: str | None = None
    tenant_id: str
    tenant_name: str | None = None
    is_deactivated: bool = False
    created_at: datetime
    updated_at: datetime | None = None
    roles: list[UserRoleResponse] = []

    class Config:
        from_attributes = True


class UserCreatedResponse(BaseModel):
    """
    Response when provisioning a user.

    IMPORTANT: 'temp_password' is shown ONLY here - it cannot be retrieved later.
    """
    user_id: str
    email: str
    temp_password: str = Field(..., description="Temporary password (shown only once)")
    message: str = "User created. Share the temporary password securely - it cannot be retrieved later."


# ========================================
# Role Assignment Schemas
# ========================================

class RoleAssign(BaseModel):
    """Grant (or reactivate) a role within a tenant"""
    role: str
    tenant_id: str = Field(..., min_length=1)

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        return _check_role(v)
