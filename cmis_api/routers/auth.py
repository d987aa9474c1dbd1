### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Authentication Router -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Authentication API Endpoints

- POST /auth/login: email/password sign-in, returns a session token
- GET /auth/me: signed-in user's profile and active roles
"""

from fastapi import APIRouter, Depends, Request

from cmis_api.config import get_api_settings
from cmis_api.dependencies import get_identity_provider
from cmis_api.middleware import CurrentUser, get_current_user
from cmis_api.middleware.rate_limit import limiter
from cmis_api.schemas.auth import LoginRequest, LoginResponse, ProfileResponse, ProfileRole
from cmis_api.schemas.responses import APIResponse
from cmis_api.services import IdentityProvider

router = APIRouter()

settings = get_api_settings()


@router.post(
    "/login",
    response_model=APIResponse[LoginResponse],
    summary="Sign in",
    description="Authenticate with email and password to get a session token",
)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    data: LoginRequest,
    identity: IdentityProvider = Depends(get_identity_provider),
) -> APIResponse[LoginResponse]:
    """
    Authenticate a console user and return a bearer token.

    Wrong credentials return 401 (see AuthError).
    """
    subject_id = await identity.authenticate(data.email, data.password)
    token, expires_in = identity.issue_token(subject_id)

    return APIResponse(
        success=True,
        data=LoginResponse(token=token, expires_in=expires_in),
        message="Login successful",
    )


@router.get(
    "/me",
    response_model=APIResponse[ProfileResponse],
    summary="Current user",
    description="Profile, active roles and acting role of the signed-in user",
)
async def me(user: CurrentUser = Depends(get_current_user)) -> APIResponse[ProfileResponse]:
    """Get the signed-in user's profile"""
    return APIResponse(
        success=True,
        data=ProfileResponse(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            tenant_id=user.tenant_id,
            acting_role=user.acting_role,
            acting_tenant_id=user.acting_tenant_id,
            roles=[
                ProfileRole(
                    role=r.role,
                    tenant_id=r.tenant_id,
                    tenant_name=r.tenant.name if r.tenant else None,
                )
                for r in user.roles
            ],
        ),
    )
