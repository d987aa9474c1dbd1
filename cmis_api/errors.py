### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Service Errors -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Service Errors

Every directory/registry/workflow operation converts internal failures into
one of these and raises it to the caller. The API layer maps them to HTTP
status codes in a single exception handler (see cmis_api.main).

- ValidationError: missing or malformed input, raised before any write
- AuthError: no authenticated actor, or the identity provider refused
- NotFoundError: referenced record does not exist
- ConstraintError: unique/constraint violation on write
- DependencyError: a later step failed after an earlier step committed
- TransitionError: workflow action on an application that is not actionable
"""

from fastapi import status


class ConsoleError(Exception):
    """Base class for errors surfaced to the console"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ConsoleError):
    """Missing or malformed required input"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class AuthError(ConsoleError):
    """No authenticated actor, or identity-provider rejection"""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ConsoleError):
    """Referenced application/user/role/tenant is absent"""

    status_code = status.HTTP_404_NOT_FOUND


class ConstraintError(ConsoleError):
    """Unique or constraint violation on insert/update"""

    status_code = status.HTTP_409_CONFLICT


class DependencyError(ConsoleError):
    """A later step of a multi-step operation failed"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class TransitionError(ConsoleError):
    """Workflow transition attempted from a non-actionable status"""

    status_code = status.HTTP_409_CONFLICT
