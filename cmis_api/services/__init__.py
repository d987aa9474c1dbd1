### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - API Services Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Service layer for the CMIS Admin Console API

- directory: users and role assignments
- registry: application listing and lookup
- workflow: approve / reject / request-info
- notifications: best-effort in-app and email notifications
- identity: sign-in accounts and session tokens
- storage: registration documents and signed links
"""

from .directory import CreatedUser, NewUser, UserDirectory, UserFilters, UserPage
from .identity import IdentityProvider
from .mailer import StatusMailer
from .notifications import NotificationDispatcher, NotificationResult
from .registry import ApplicationFilters, ApplicationPage, ApplicationRegistry
from .storage import DocumentStorage
from .workflow import WorkflowEngine

__all__ = [
    "ApplicationFilters",
    "ApplicationPage",
    "ApplicationRegistry",
    "CreatedUser",
    "DocumentStorage",
    "IdentityProvider",
    "NewUser",
    "NotificationDispatcher",
    "NotificationResult",
    "StatusMailer",
    "UserDirectory",
    "UserFilters",
    "UserPage",
    "WorkflowEngine",
]
