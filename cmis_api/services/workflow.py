### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Application Workflow Engine -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Application Workflow Engine

Reviewer actions on registration applications:
- approve: creates the Cooperative with a new registration number and
  moves the application to APPROVED, in one transaction
- reject: REJECTED with a reason
- request_info: ADDITIONAL_INFO_REQUIRED with reviewer notes

Only SUBMITTED and UNDER_REVIEW applications are actionable. The status is
re-checked inside the UPDATE itself (WHERE status IN ...), so two reviewers
acting at once cannot both succeed; the loser gets TransitionError.

Registration numbers are COOP-<year>-<5 digits>, sequenced per tenant per
year. A unique (tenant_id, registration_number) constraint backs the
sequence; a collision is retried with the next candidate number. The year
and registration date follow the configured application timezone.

The applicant is notified after each successful transition. Notification
failures never undo or fail the transition.
"""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cmis_api.database import commit_or_raise
from cmis_api.errors import AuthError, ConstraintError, NotFoundError, TransitionError, ValidationError
from cmis_api.models import (
    ACTIONABLE_STATUSES,
    ApplicationStatus,
    Cooperative,
    RegistrationApplication,
    format_registration_number,
)
from cmis_api.models.cooperative import registration_number_prefix
from cmis_api.services.notifications import NotificationDispatcher

logger = logging.getLogger(__name__)

# Attempts at allocating a free registration number before giving up
MAX_NUMBER_ATTEMPTS = 5


def local_now(timezone: str) -> datetime:
    """Current wall-clock time in an IANA timezone"""
    return datetime.now(ZoneInfo(timezone))


class WorkflowEngine:
    """
    Service layer for application status transitions.

    Args:
        db: Database session
        dispatcher: Notification dispatcher (None disables notifications)
        timezone: IANA timezone deciding the registration year and date
    """

    def __init__(
        self,
        db: Session,
        dispatcher: NotificationDispatcher | None = None,
        timezone: str = "UTC",
    ):
        self.db = db
        self.dispatcher = dispatcher
        self.timezone = timezone

    # ========================================
    # Helpers
    # ========================================

    def _load(self, application_id: str) -> RegistrationApplication:
        application = (
            self.db.query(RegistrationApplication)
            .filter(RegistrationApplication.id == application_id)
            .first()
        )
        if not application:
            raise NotFoundError(f"Application {application_id} not found")
        return application

    @staticmethod
    def _require_actor(actor_id: str | None):
        if not actor_id:
            raise AuthError("Not authenticated")

    @staticmethod
    def _require_actionable(application: RegistrationApplication):
        if not application.is_actionable:
            raise TransitionError(
                f"Application {application.application_number} is {application.status.value} "
                "and can no longer be reviewed"
            )

    def _transition(self, application: RegistrationApplication, new_status: ApplicationStatus, **values):
        """
        Conditionally move an application to new_status (not committed).

        Raises:
            TransitionError: If another writer already moved it out of an
                actionable state
        """
        result = self.db.execute(
            update(RegistrationApplication)
            .where(
                RegistrationApplication.id == application.id,
                RegistrationApplication.status.in_(ACTIONABLE_STATUSES),
            )
            .values(status=new_status, updated_at=datetime.utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            raise TransitionError(
                f"Application {application.application_number} was already reviewed by someone else"
            )

    async def _notify(self, application: RegistrationApplication):
        if self.dispatcher is None or not application.applicant_user_id:
            return
        result = await self.dispatcher.notify_application_status(
            application.applicant_user_id,
            application.application_number,
            application.status,
            application.proposed_name,
        )
        if result is not None and not result.delivered:
            logger.warning(
                "Applicant %s was not notified about %s: %s",
                application.applicant_user_id,
                application.application_number,
                result.error,
            )

    def next_registration_number(self, tenant_id: str, year: int | None = None, offset: int = 0) -> str:
        """
        Next registration number for a tenant.

        Counts the tenant's cooperatives already numbered for the year and
        adds one: with 3 prior numbers in 2025 the result is COOP-2025-00004.
        offset skips ahead past candidates already found taken.
        """
        year = year or local_now(self.timezone).year
        prior = (
            self.db.query(Cooperative)
            .filter(
                Cooperative.tenant_id == tenant_id,
                Cooperative.registration_number.like(f"{registration_number_prefix(year)}%"),
            )
            .count()
        )
        return format_registration_number(year, prior + 1 + offset)

    # ========================================
    # Transitions
    # ========================================

    async def approve(self, application_id: str, actor_id: str | None) -> Cooperative:
        """
        Approve an application and register its cooperative.

        The cooperative insert and the status change commit together.

        Args:
            application_id: Application to approve
            actor_id: Acting reviewer's user id

        Returns:
            The newly registered Cooperative

        Raises:
            AuthError: No acting user
            NotFoundError: Application does not exist
            TransitionError: Application is not SUBMITTED / UNDER_REVIEW
            ConstraintError: No free registration number after retries
        """
        self._require_actor(actor_id)

        for attempt in range(MAX_NUMBER_ATTEMPTS):
            application = self._load(application_id)
            self._require_actionable(application)

            now = datetime.utcnow()
            today = local_now(self.timezone).date()
            registration_number = self.next_registration_number(
                application.tenant_id, today.year, offset=attempt
            )
            cooperative = Cooperative(
                registration_number=registration_number,
                name=application.proposed_name,
                type_id=application.type_id,
                tenant_id=application.tenant_id,
                application_id=application.id,
                status="REGISTERED",
                registration_date=today,
                address=application.address,
                email=application.contact_email,
                phone=application.contact_phone,
                total_members=application.proposed_members or 0,
                total_share_capital=application.proposed_share_capital or 0,
                is_active=True,
            )

            try:
                self.db.add(cooperative)
                self.db.flush()
            except IntegrityError:
                self.db.rollback()
                logger.warning(
                    "Registration number %s taken (attempt %d/%d), retrying",
                    registration_number,
                    attempt + 1,
                    MAX_NUMBER_ATTEMPTS,
                )
                continue

            self._transition(
                application,
                ApplicationStatus.APPROVED,
                approved_by=actor_id,
                approved_at=now,
                reviewed_by=actor_id,
                reviewed_at=now,
            )
            commit_or_raise(self.db, "approve application")
            break
        else:
            raise ConstraintError("Could not allocate a unique registration number, please retry")

        self.db.refresh(application)
        self.db.refresh(cooperative)
        logger.info(
            "Application %s approved by %s as %s",
            application.application_number,
            actor_id,
            cooperative.registration_number,
        )

        await self._notify(application)
        return cooperative

    async def reject(self, application_id: str, reason: str, actor_id: str | None) -> RegistrationApplication:
        """
        Reject an application.

        Raises:
            AuthError: No acting user
            ValidationError: Empty reason
            NotFoundError: Application does not exist
            TransitionError: Application is not SUBMITTED / UNDER_REVIEW
        """
        self._require_actor(actor_id)
        if not reason or not reason.strip():
            raise ValidationError("A rejection reason is required")

        application = self._load(application_id)
        self._require_actionable(application)

        now = datetime.utcnow()
        self._transition(
            application,
            ApplicationStatus.REJECTED,
            rejection_reason=reason.strip(),
            reviewed_by=actor_id,
            reviewed_at=now,
        )
        commit_or_raise(self.db, "reject application")
        self.db.refresh(application)
        logger.info("Application %s rejected by %s", application.application_number, actor_id)

        await self._notify(application)
        return application

    async def request_info(self, application_id: str, notes: str, actor_id: str | None) -> RegistrationApplication:
        """
        Send an application back to the applicant for more information.

        Raises:
            AuthError: No acting user
            ValidationError: Empty notes
            NotFoundError: Application does not exist
            TransitionError: Application is not SUBMITTED / UNDER_REVIEW
        """
        self._require_actor(actor_id)
        if not notes or not notes.strip():
            raise ValidationError("Notes describing the required information are required")

        application = self._load(application_id)
        self._require_actionable(application)

        now = datetime.utcnow()
        self._transition(
            application,
            ApplicationStatus.ADDITIONAL_INFO_REQUIRED,
            review_notes=notes.strip(),
            reviewed_by=actor_id,
            reviewed_at=now,
        )
        commit_or_raise(self.db, "request information")
        self.db.refresh(application)
        logger.info("Application %s returned for information by %s", application.application_number, actor_id)

        await self._notify(application)
        return application
