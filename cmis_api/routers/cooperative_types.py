### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Cooperative Types Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Cooperative Type lookup (used by the application filters)
"""

from fastapi import APIRouter, Depends

from cmis_api.dependencies import get_application_registry
from cmis_api.middleware import CurrentUser, get_current_user
from cmis_api.schemas.applications import CooperativeTypeResponse
from cmis_api.schemas.responses import APIResponse
from cmis_api.services import ApplicationRegistry

router = APIRouter()


@router.get(
    "",
    response_model=APIResponse[list[CooperativeTypeResponse]],
    summary="List cooperative types",
)
async def list_cooperative_types(
    user: CurrentUser = Depends(get_current_user),
    registry: ApplicationRegistry = Depends(get_application_registry),
) -> APIResponse[list[CooperativeTypeResponse]]:
    types = await registry.list_cooperative_types()
    return APIResponse(success=True, data=[CooperativeTypeResponse.model_validate(t) for t in types])
