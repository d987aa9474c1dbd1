### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Session Authentication Middleware -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Session Authentication

Resolves the Authorization: Bearer session token to the signed-in user and
their active role assignments. Role checks are done with require_role().
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session, selectinload

from cmis_api.database import get_db
from cmis_api.dependencies import get_identity_provider
from cmis_api.models import RoleName, User, UserRole
from cmis_api.services import IdentityProvider

# Bearer token for session authentication
bearer_scheme = HTTPBearer(auto_error=False)

# Highest-privilege role wins when picking the acting role
ROLE_PRECEDENCE = (
    RoleName.SUPER_ADMIN,
    RoleName.COUNTY_ADMIN,
    RoleName.COUNTY_OFFICER,
    RoleName.COOPERATIVE_ADMIN,
    RoleName.AUDITOR,
    RoleName.TRAINER,
    RoleName.CITIZEN,
)


class CurrentUser:
    """Container for the signed-in user and their active roles"""

    def __init__(
        self,
        id: str,
        email: str,
        full_name: str,
        tenant_id: str,
        roles: list[UserRole] | None = None,
    ):
        self.id = id
        self.email = email
        self.full_name = full_name
        self.tenant_id = tenant_id
        self.roles = roles or []

    def has_role(self, role: str) -> bool:
        """Check if the user holds a role as an active assignment"""
        return any(r.role == role for r in self.roles)

    def _acting_assignment(self) -> UserRole | None:
        for role in ROLE_PRECEDENCE:
            for assignment in self.roles:
                if assignment.role == role.value:
                    return assignment
        return None

    @property
    def acting_role(self) -> str | None:
        """Highest-privilege active role"""
        assignment = self._acting_assignment()
        return assignment.role if assignment else None

    @property
    def acting_tenant_id(self) -> str | None:
        """Tenant of the acting role (falls back to the home tenant)"""
        assignment = self._acting_assignment()
        return assignment.tenant_id if assignment else self.tenant_id


async def get_current_user(
    request: Request,
    bearer: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> CurrentUser:
    """
    Validate the session token from the Authorization header.

    Args:
        request: FastAPI request object (for storing user info)
        bearer: Token from Authorization: Bearer header
        db: Database session
        identity: Identity provider that signed the token

    Returns:
        CurrentUser with active role assignments loaded

    Raises:
        HTTPException: 401 if the token is missing, invalid or orphaned
    """
    if not bearer or not bearer.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Bearer token is required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    subject_id = identity.decode_token(bearer.credentials)
    if not subject_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = (
        db.query(User)
        .options(selectinload(User.roles).selectinload(UserRole.tenant))
        .filter(User.id == subject_id)
        .first()
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User profile not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    current_user = CurrentUser(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        tenant_id=user.tenant_id,
        roles=user.active_roles,
    )
    # Store in request state for request logging
    request.state.current_user = current_user
    return current_user


def require_role(*roles: RoleName):
    """
    Dependency factory for role checking

    Usage:
        @router.get("/protected")
        async def protected_route(
            user: CurrentUser = Depends(get_current_user),
            _: None = Depends(require_role(RoleName.SUPER_ADMIN))
        ):
            ...
    """
    allowed = [r.value for r in roles]

    async def check_role(
        user: CurrentUser = Security(get_current_user),
    ) -> None:
        if not any(user.has_role(role) for role in allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission denied: one of {', '.join(allowed)} required",
            )

    return check_role


# Convenience dependencies for common role sets
require_super_admin = require_role(RoleName.SUPER_ADMIN)
require_reviewer = require_role(RoleName.SUPER_ADMIN, RoleName.COUNTY_ADMIN)
require_application_reader = require_role(
    RoleName.SUPER_ADMIN, RoleName.COUNTY_ADMIN, RoleName.COUNTY_OFFICER
)
