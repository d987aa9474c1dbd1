### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Application Registry -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Application Registry

Read side of the review workflow: paginated, filtered and role-scoped
listing of registration applications, plus single-application lookup.

Scoping:
- COUNTY_ADMIN and COUNTY_OFFICER only see applications in their own tenant.
  The restriction is AND-ed with any county filter the caller passes.
- Every other role sees all tenants.

Order: newest submission first (never-submitted rows last), then newest
created; id breaks ties so pages never overlap.
"""

import logging
import math
from dataclasses import dataclass

from sqlalchemy import false, or_
from sqlalchemy.orm import Session, joinedload

from cmis_api.errors import NotFoundError, ValidationError
from cmis_api.models import (
    COUNTY_SCOPED_ROLES,
    ApplicationStatus,
    CooperativeType,
    RegistrationApplication,
)

logger = logging.getLogger(__name__)

ALL_STATUSES = "ALL"


@dataclass
class ApplicationFilters:
    """Optional list_applications filters"""

    status: str | None = None  # ApplicationStatus value, "ALL" or None
    county_id: str | None = None
    type_id: str | None = None
    search: str | None = None


@dataclass
class ApplicationPage:
    rows: list[RegistrationApplication]
    total_count: int
    total_pages: int


def is_county_scoped(role: str | None) -> bool:
    return role in {r.value for r in COUNTY_SCOPED_ROLES}


class ApplicationRegistry:
    """Query layer over registration applications"""

    def __init__(self, db: Session):
        self.db = db

    def _scoped_query(self, role: str | None, tenant_id: str | None):
        query = self.db.query(RegistrationApplication).options(
            joinedload(RegistrationApplication.cooperative_type),
            joinedload(RegistrationApplication.tenant),
        )
        if is_county_scoped(role):
            if not tenant_id:
                # County role without a tenant sees nothing
                return query.filter(false())
            query = query.filter(RegistrationApplication.tenant_id == tenant_id)
        return query

    async def list_applications(
        self,
        role: str | None,
        tenant_id: str | None,
        filters: ApplicationFilters | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> ApplicationPage:
        """
        List applications visible to the caller.

        Args:
            role: Caller's acting role
            tenant_id: Caller's acting tenant
            filters: Status / county / type / search filters
            page: Page number (starts at 1)
            page_size: Rows per page

        Returns:
            ApplicationPage with rows, total_count and total_pages
            (total_pages is 0 when nothing matches)

        Raises:
            ValidationError: Unknown status or non-positive paging
        """
        filters = filters or ApplicationFilters()
        if page < 1 or page_size < 1:
            raise ValidationError("page and page_size must be positive")

        query = self._scoped_query(role, tenant_id)

        if filters.status and filters.status != ALL_STATUSES:
            try:
                status = ApplicationStatus(filters.status)
            except ValueError as e:
                raise ValidationError(f"Unknown application status '{filters.status}'") from e
            query = query.filter(RegistrationApplication.status == status)

        if filters.county_id:
            query = query.filter(RegistrationApplication.tenant_id == filters.county_id)

        if filters.type_id:
            query = query.filter(RegistrationApplication.type_id == filters.type_id)

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.filter(
                or_(
                    RegistrationApplication.application_number.ilike(pattern),
                    RegistrationApplication.proposed_name.ilike(pattern),
                )
            )

        total = query.count()
        rows = (
            query.order_by(
                RegistrationApplication.submitted_at.is_(None),
                RegistrationApplication.submitted_at.desc(),
                RegistrationApplication.created_at.desc(),
                RegistrationApplication.id,
            )
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )

        return ApplicationPage(
            rows=rows,
            total_count=total,
            total_pages=math.ceil(total / page_size),
        )

    async def get_application(
        self,
        application_id: str,
        role: str | None = None,
        tenant_id: str | None = None,
    ) -> RegistrationApplication:
        """
        Get one application.

        When a county-scoped role is given, applications outside the
        caller's tenant are reported as not found.

        Raises:
            NotFoundError: If the application does not exist (or is out of scope)
        """
        application = (
            self._scoped_query(role, tenant_id)
            .filter(RegistrationApplication.id == application_id)
            .first()
        )
        if not application:
            raise NotFoundError(f"Application {application_id} not found")
        return application

    async def list_cooperative_types(self) -> list[CooperativeType]:
        """Cooperative type lookup, alphabetical"""
        return self.db.query(CooperativeType).order_by(CooperativeType.name).all()
