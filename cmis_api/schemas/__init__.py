### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - API Schemas Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
API Schemas Package

Contains Pydantic models for request/response validation:
- users: Directory and role assignment
- applications: Registry, workflow and documents
- tenants / auth / notifications
- responses: Common response schemas
"""

from .applications import (
    ApplicationDetailResponse,
    ApplicationResponse,
    CooperativeResponse,
    CooperativeTypeResponse,
    DocumentLink,
    RejectRequest,
    RequestInfoRequest,
)
from .auth import LoginRequest, LoginResponse, ProfileResponse, ProfileRole
from .notifications import NotificationResponse
from .responses import (
    APIResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    PaginatedResponse,
    PaginationMeta,
)
from .tenants import TenantCreate, TenantResponse, TenantUpdate
from .users import RoleAssign, UserCreate, UserCreatedResponse, UserResponse, UserRoleResponse, UserUpdate

__all__ = [
    "APIResponse",
    "ApplicationDetailResponse",
    "ApplicationResponse",
    "CooperativeResponse",
    "CooperativeTypeResponse",
    "DocumentLink",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "NotificationResponse",
    "PaginatedResponse",
    "PaginationMeta",
    "ProfileResponse",
    "ProfileRole",
    "RejectRequest",
    "RequestInfoRequest",
    "RoleAssign",
    "TenantCreate",
    "TenantResponse",
    "TenantUpdate",
    "UserCreate",
    "UserCreatedResponse",
    "UserResponse",
    "UserRoleResponse",
    "UserUpdate",
]
