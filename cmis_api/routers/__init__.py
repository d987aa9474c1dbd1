### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - API Routers Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
API Routers Package

Contains FastAPI routers for each resource:
- auth: Sign-in and profile
- users: User/role directory
- applications: Review queue and workflow actions
- cooperative_types: Type lookup
- tenants: County management
- notifications: Inbox
- documents: Signed document downloads
"""

from .applications import router as applications_router
from .auth import router as auth_router
from .cooperative_types import router as cooperative_types_router
from .documents import router as documents_router
from .notifications import router as notifications_router
from .tenants import router as tenants_router
from .users import router as users_router

__all__ = [
    "applications_router",
    "auth_router",
    "cooperative_types_router",
    "documents_router",
    "notifications_router",
    "tenants_router",
    "users_router",
]
