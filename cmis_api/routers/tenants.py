### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Tenant Management Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Tenant Management API Endpoints

Counties (COUNTY tenants) and the national HQ:
- List / view: any signed-in user (used by the console filters)
- Create / update / deactivate counties: SUPER_ADMIN

County codes are unique among COUNTY tenants. Tenants are never deleted;
DELETE only deactivates the county.
"""

import math
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from cmis_api.database import commit_or_raise, get_db
from cmis_api.errors import ConstraintError, NotFoundError
from cmis_api.middleware import CurrentUser, get_current_user, require_super_admin
from cmis_api.models import Tenant, TenantType, User
from cmis_api.schemas.responses import APIResponse, PaginatedResponse, PaginationMeta
from cmis_api.schemas.tenants import TenantCreate, TenantResponse, TenantUpdate

router = APIRouter()


def _get_tenant(db: Session, tenant_id: str) -> Tenant:
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise NotFoundError(f"Tenant {tenant_id} not found")
    return tenant


def _check_county_code(db: Session, county_code: str, exclude_id: str | None = None):
    """Raise ConstraintError if another county already uses county_code"""
    query = db.query(Tenant).filter(
        Tenant.type == TenantType.COUNTY.value,
        Tenant.county_code == county_code,
    )
    if exclude_id:
        query = query.filter(Tenant.id != exclude_id)
    if query.first():
        raise ConstraintError(f"County code '{county_code}' is already in use")


def _tenant_response(db: Session, tenant: Tenant) -> TenantResponse:
    response = TenantResponse.model_validate(tenant)
    response.user_count = db.query(User).filter(User.tenant_id == tenant.id).count()
    return response


@router.get(
    "",
    response_model=PaginatedResponse[TenantResponse],
    summary="List tenants",
    description="List counties and the national HQ with pagination",
)
async def list_tenants(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=100),
    active_only: bool = Query(False, description="Only show active tenants"),
    tenant_type: TenantType | None = Query(None, alias="type", description="COUNTY or NATIONAL"),
) -> PaginatedResponse[TenantResponse]:
    """List tenants"""
    query = db.query(Tenant)
    if active_only:
        query = query.filter(Tenant.is_active.is_(True))
    if tenant_type:
        query = query.filter(Tenant.type == tenant_type.value)

    total = query.count()
    tenants = query.order_by(Tenant.name).offset((page - 1) * page_size).limit(page_size).all()

    return PaginatedResponse(
        success=True,
        data=[_tenant_response(db, t) for t in tenants],
        pagination=PaginationMeta.build(page, page_size, total, math.ceil(total / page_size)),
    )


@router.post(
    "",
    response_model=APIResponse[TenantResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create county",
    description="Create a new county tenant",
)
async def create_tenant(
    data: TenantCreate,
    _: None = Depends(require_super_admin),
    db: Session = Depends(get_db),
) -> APIResponse[TenantResponse]:
    """Create a new county"""
    _check_county_code(db, data.county_code)

    tenant = Tenant(
        name=data.name,
        type=TenantType.COUNTY.value,
        county_code=data.county_code,
        contact_email=data.contact_email,
        contact_phone=data.contact_phone,
        address=data.address,
    )
    db.add(tenant)
    commit_or_raise(db, "create county")
    db.refresh(tenant)

    return APIResponse(success=True, data=_tenant_response(db, tenant), message="County created successfully")


@router.get(
    "/{tenant_id}",
    response_model=APIResponse[TenantResponse],
    summary="Get tenant",
    description="Get tenant details by ID",
)
async def get_tenant(
    tenant_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> APIResponse[TenantResponse]:
    """Get tenant by ID"""
    return APIResponse(success=True, data=_tenant_response(db, _get_tenant(db, tenant_id)))


@router.patch(
    "/{tenant_id}",
    response_model=APIResponse[TenantResponse],
    summary="Update county",
    description="Update county details",
)
async def update_tenant(
    tenant_id: str,
    data: TenantUpdate,
    _: None = Depends(require_super_admin),
    db: Session = Depends(get_db),
) -> APIResponse[TenantResponse]:
    """Update tenant"""
    tenant = _get_tenant(db, tenant_id)

    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("county_code") and tenant.type == TenantType.COUNTY.value:
        _check_county_code(db, update_data["county_code"], exclude_id=tenant.id)

    for field, value in update_data.items():
        setattr(tenant, field, value)
    tenant.updated_at = datetime.utcnow()

    commit_or_raise(db, "update county")
    db.refresh(tenant)

    return APIResponse(success=True, data=_tenant_response(db, tenant), message="County updated successfully")


@router.delete(
    "/{tenant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate county",
    description="Deactivate a county (tenants are never deleted)",
)
async def delete_tenant(
    tenant_id: str,
    _: None = Depends(require_super_admin),
    db: Session = Depends(get_db),
):
    """Deactivate tenant"""
    tenant = _get_tenant(db, tenant_id)
    tenant.is_active = False
    tenant.updated_at = datetime.utcnow()
    commit_or_raise(db, "deactivate county")
