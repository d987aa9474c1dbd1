### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - API Middleware Package -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
API Middleware Package

Contains middleware for request processing:
- auth: session token validation and role checks
- logging: Request/response logging
- rate_limit: Sign-in rate limiting
"""

from .auth import (
    CurrentUser,
    get_current_user,
    require_application_reader,
    require_reviewer,
    require_role,
    require_super_admin,
)
from .logging import RequestLoggingMiddleware

__all__ = [
    "CurrentUser",
    "RequestLoggingMiddleware",
    "get_current_user",
    "require_application_reader",
    "require_reviewer",
    "require_role",
    "require_super_admin",
]
