### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Registration Applications Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Registration Application API Endpoints

Review queue and reviewer actions:
- List / view applications (county roles only see their own county)
- Approve, reject, or request more information

Reading requires SUPER_ADMIN, COUNTY_ADMIN or COUNTY_OFFICER.
Reviewer actions require SUPER_ADMIN or COUNTY_ADMIN.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cmis_api.dependencies import get_application_registry, get_document_storage, get_workflow_engine
from cmis_api.middleware import (
    CurrentUser,
    get_current_user,
    require_application_reader,
    require_reviewer,
)
from cmis_api.models import RegistrationApplication
from cmis_api.schemas.applications import (
    ApplicationDetailResponse,
    ApplicationResponse,
    CooperativeResponse,
    DocumentLink,
    RejectRequest,
    RequestInfoRequest,
)
from cmis_api.schemas.responses import APIResponse, PaginatedResponse, PaginationMeta
from cmis_api.services import ApplicationFilters, ApplicationRegistry, DocumentStorage, WorkflowEngine

router = APIRouter()


def _application_response(application: RegistrationApplication, schema=ApplicationResponse):
    response = schema.model_validate(application)
    response.type_name = application.cooperative_type.name if application.cooperative_type else None
    response.tenant_name = application.tenant.name if application.tenant else None
    return response


@router.get(
    "",
    response_model=PaginatedResponse[ApplicationResponse],
    summary="List applications",
    description="Retrieve a paginated, filtered list of registration applications",
)
async def list_applications(
    user: CurrentUser = Depends(get_current_user),
    _: None = Depends(require_application_reader),
    registry: ApplicationRegistry = Depends(get_application_registry),
    status: Optional[str] = Query(None, description="Application status, or ALL"),
    county_id: Optional[str] = Query(None, description="Filter by county (tenant) ID"),
    type_id: Optional[str] = Query(None, description="Filter by cooperative type ID"),
    search: Optional[str] = Query(None, description="Search application number or proposed name"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PaginatedResponse[ApplicationResponse]:
    """
    List applications

    - **status**: DRAFT, SUBMITTED, UNDER_REVIEW, ADDITIONAL_INFO_REQUIRED, APPROVED, REJECTED or ALL
    - **county_id**: County (tenant) ID
    - **type_id**: Cooperative type ID
    - **search**: Case-insensitive match on application number or proposed name
    """
    result = await registry.list_applications(
        role=user.acting_role,
        tenant_id=user.acting_tenant_id,
        filters=ApplicationFilters(status=status, county_id=county_id, type_id=type_id, search=search),
        page=page,
        page_size=page_size,
    )

    return PaginatedResponse(
        success=True,
        data=[_application_response(a) for a in result.rows],
        pagination=PaginationMeta.build(page, page_size, result.total_count, result.total_pages),
    )


@router.get(
    "/{application_id}",
    response_model=APIResponse[ApplicationDetailResponse],
    summary="Get application",
    description="Full application details with time-limited document links",
)
async def get_application(
    application_id: str,
    user: CurrentUser = Depends(get_current_user),
    _: None = Depends(require_application_reader),
    registry: ApplicationRegistry = Depends(get_application_registry),
    storage: DocumentStorage = Depends(get_document_storage),
) -> APIResponse[ApplicationDetailResponse]:
    """Get application by ID"""
    application = await registry.get_application(
        application_id, role=user.acting_role, tenant_id=user.acting_tenant_id
    )
    response = _application_response(application, ApplicationDetailResponse)
    response.documents = [DocumentLink(**link) for link in storage.document_links(application)]
    return APIResponse(success=True, data=response)


@router.post(
    "/{application_id}/approve",
    response_model=APIResponse[CooperativeResponse],
    summary="Approve application",
    description="Approve the application and register its cooperative",
)
async def approve_application(
    application_id: str,
    user: CurrentUser = Depends(get_current_user),
    _: None = Depends(require_reviewer),
    registry: ApplicationRegistry = Depends(get_application_registry),
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> APIResponse[CooperativeResponse]:
    """Approve application"""
    await registry.get_application(application_id, role=user.acting_role, tenant_id=user.acting_tenant_id)
    cooperative = await engine.approve(application_id, actor_id=user.id)

    return APIResponse(
        success=True,
        data=CooperativeResponse.model_validate(cooperative),
        message=f"Application approved. Registration number: {cooperative.registration_number}",
    )


@router.post(
    "/{application_id}/reject",
    response_model=APIResponse[ApplicationResponse],
    summary="Reject application",
    description="Reject the application with a reason shown to the applicant",
)
async def reject_application(
    application_id: str,
    data: RejectRequest,
    user: CurrentUser = Depends(get_current_user),
    _: None = Depends(require_reviewer),
    registry: ApplicationRegistry = Depends(get_application_registry),
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> APIResponse[ApplicationResponse]:
    """Reject application"""
    await registry.get_application(application_id, role=user.acting_role, tenant_id=user.acting_tenant_id)
    application = await engine.reject(application_id, data.reason, actor_id=user.id)

    return APIResponse(
        success=True,
        data=_application_response(application),
        message="Application rejected",
    )


@router.post(
    "/{application_id}/request-info",
    response_model=APIResponse[ApplicationResponse],
    summary="Request information",
    description="Return the application to the applicant for additional information",
)
async def request_application_info(
    application_id: str,
    data: RequestInfoRequest,
    user: CurrentUser = Depends(get_current_user),
    _: None = Depends(require_reviewer),
    registry: ApplicationRegistry = Depends(get_application_registry),
    engine: WorkflowEngine = Depends(get_workflow_engine),
) -> APIResponse[ApplicationResponse]:
    """Request additional information"""
    await registry.get_application(application_id, role=user.acting_role, tenant_id=user.acting_tenant_id)
    application = await engine.request_info(application_id, data.notes, actor_id=user.id)

    return APIResponse(
        success=True,
        data=_application_response(application),
        message="Additional information requested",
    )
