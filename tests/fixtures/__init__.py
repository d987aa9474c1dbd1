"""
Test fixtures and factories for CMIS Admin Console tests.
"""

from tests.fixtures.factories import (
    create_application,
    create_cooperative,
    create_cooperative_type,
    create_tenant,
    create_user,
)

__all__ = [
    "create_application",
    "create_cooperative",
    "create_cooperative_type",
    "create_tenant",
    "create_user",
]
