### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - User Management Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
User Management API Endpoints

Provides endpoints for the user/role directory:
- Users: list, create, view, update, deactivate
- Roles: grant (or reactivate), remove

Note: These endpoints require the SUPER_ADMIN role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from cmis_api.dependencies import get_user_directory
from cmis_api.middleware import CurrentUser, get_current_user, require_super_admin
from cmis_api.models import User, UserRole
from cmis_api.schemas.responses import APIResponse, PaginatedResponse, PaginationMeta
from cmis_api.schemas.users import (
    RoleAssign,
    UserCreate,
    UserCreatedResponse,
    UserResponse,
    UserRoleResponse,
    UserUpdate,
)
from cmis_api.services import NewUser, UserDirectory, UserFilters

router = APIRouter()


def _role_response(assignment: UserRole) -> UserRoleResponse:
    response = UserRoleResponse.model_validate(assignment)
    response.tenant_name = assignment.tenant.name if assignment.tenant else None
    return response


def _user_response(user: User) -> UserResponse:
    response = UserResponse.model_validate(user)
    response.tenant_name = user.tenant.name if user.tenant else None
    response.is_deactivated = user.is_deactivated
    response.roles = [_role_response(r) for r in user.roles]
    return response


@router.get(
    "",
    response_model=PaginatedResponse[UserResponse],
    summary="List users",
    description="List users with their role assignments, with filtering and pagination",
)
async def list_users(
    _: None = Depends(require_super_admin),
    directory: UserDirectory = Depends(get_user_directory),
    role: Optional[str] = Query(None, description="Only users holding this role (active)"),
    tenant_id: Optional[str] = Query(None, description="Filter by home tenant"),
    search: Optional[str] = Query(None, description="Search name, email or ID number"),
    is_active: Optional[bool] = Query(None, description="True = has an active role, False = deactivated"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PaginatedResponse[UserResponse]:
    """
    List users

    - **role**: Role held as an active assignment
    - **tenant_id**: Home tenant
    - **search**: Case-insensitive match on full name, email or ID number
    - **is_active**: Active / deactivated users
    """
    result = await directory.list_users(
        UserFilters(role=role, tenant_id=tenant_id, search=search, is_active=is_active),
        page=page,
        page_size=page_size,
    )

    return PaginatedResponse(
        success=True,
        data=[_user_response(u) for u in result.rows],
        pagination=PaginationMeta.build(page, page_size, result.total_count, result.total_pages),
    )


@router.post(
    "",
    response_model=APIResponse[UserCreatedResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Provision a user with a temporary password and an initial role",
)
async def create_user(
    data: UserCreate,
    user: CurrentUser = Depends(get_current_user),
    _: None = Depends(require_super_admin),
    directory: UserDirectory = Depends(get_user_directory),
) -> APIResponse[UserCreatedResponse]:
    """
    Create a new user.

    IMPORTANT: The temporary password is returned ONLY in this response.
    """
    created = await directory.create_user(
        NewUser(
            email=data.email,
            full_name=data.full_name,
            phone=data.phone,
            id_number=data.id_number,
            tenant_id=data.tenant_id,
            role=data.role,
        ),
        assigned_by=user.id,
    )

    return APIResponse(
        success=True,
        data=UserCreatedResponse(
            user_id=created.user_id,
            email=created.email,
            temp_password=created.temp_password,
        ),
        message="User created successfully",
    )


@router.get(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    summary="Get user",
    description="Get a user and all of their role assignments",
)
async def get_user(
    user_id: str,
    _: None = Depends(require_super_admin),
    directory: UserDirectory = Depends(get_user_directory),
) -> APIResponse[UserResponse]:
    """Get user by ID"""
    return APIResponse(success=True, data=_user_response(await directory.get_user(user_id)))


@router.patch(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    summary="Update user",
    description="Update user profile fields",
)
async def update_user(
    user_id: str,
    data: UserUpdate,
    _: None = Depends(require_super_admin),
    directory: UserDirectory = Depends(get_user_directory),
) -> APIResponse[UserResponse]:
    """Update user"""
    updated = await directory.update_user(user_id, data.model_dump(exclude_unset=True))
    return APIResponse(success=True, data=_user_response(updated), message="User updated successfully")


@router.post(
    "/{user_id}/deactivate",
    response_model=APIResponse[UserResponse],
    summary="Deactivate user",
    description="Deactivate every role assignment of the user (the user record is kept)",
)
async def deactivate_user(
    user_id: str,
    _: None = Depends(require_super_admin),
    directory: UserDirectory = Depends(get_user_directory),
) -> APIResponse[UserResponse]:
    """Deactivate user"""
    changed = await directory.deactivate_user(user_id)
    user = await directory.get_user(user_id)
    return APIResponse(
        success=True,
        data=_user_response(user),
        message=f"User deactivated ({changed} role(s) revoked)",
    )


@router.post(
    "/{user_id}/roles",
    response_model=APIResponse[UserRoleResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Assign role",
    description="Grant a role within a tenant; an existing identical assignment is reactivated",
)
async def assign_role(
    user_id: str,
    data: RoleAssign,
    user: CurrentUser = Depends(get_current_user),
    _: None = Depends(require_super_admin),
    directory: UserDirectory = Depends(get_user_directory),
) -> APIResponse[UserRoleResponse]:
    """Assign role"""
    assignment = await directory.assign_role(user_id, data.role, data.tenant_id, assigned_by=user.id)
    return APIResponse(success=True, data=_role_response(assignment), message="Role assigned successfully")


@router.delete(
    "/roles/{role_id}",
    response_model=APIResponse[UserRoleResponse],
    summary="Remove role",
    description="Deactivate a role assignment (the row is kept)",
)
async def remove_role(
    role_id: str,
    _: None = Depends(require_super_admin),
    directory: UserDirectory = Depends(get_user_directory),
) -> APIResponse[UserRoleResponse]:
    """Remove role"""
    assignment = await directory.remove_role(role_id)
    return APIResponse(success=True, data=_role_response(assignment), message="Role removed successfully")
