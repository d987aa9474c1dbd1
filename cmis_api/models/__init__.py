### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - API Models Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
API Models Package

Contains SQLAlchemy models for the application database:
- Tenant: County or national HQ scope
- User / UserRole: Directory and {user, role, tenant} grants
- AuthAccount: Identity-provider credentials
- RegistrationApplication / CooperativeType: Review workflow input
- Cooperative: Entity created on approval
- Notification: In-app inbox entries
"""

from cmis_api.models.tenant import Tenant, TenantType
from cmis_api.models.user import (
    COUNTY_SCOPED_ROLES,
    AssignmentState,
    RoleName,
    User,
    UserRole,
)
from cmis_api.models.auth_account import AuthAccount, generate_temp_password
from cmis_api.models.application import (
    ACTIONABLE_STATUSES,
    DOCUMENT_FIELDS,
    ApplicationStatus,
    CooperativeType,
    RegistrationApplication,
)
from cmis_api.models.cooperative import Cooperative, format_registration_number
from cmis_api.models.notification import Notification, NotificationKind

__all__ = [
    "ACTIONABLE_STATUSES",
    "COUNTY_SCOPED_ROLES",
    "DOCUMENT_FIELDS",
    "ApplicationStatus",
    "AssignmentState",
    "AuthAccount",
    "Cooperative",
    "CooperativeType",
    "Notification",
    "NotificationKind",
    "RegistrationApplication",
    "RoleName",
    "Tenant",
    "TenantType",
    "User",
    "UserRole",
    "format_registration_number",
    "generate_temp_password",
]
