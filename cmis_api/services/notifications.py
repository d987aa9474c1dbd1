### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Notification Dispatcher -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Notification Dispatcher

Writes in-app notifications and (optionally) status emails.

Delivery is best-effort: every failure is logged and reported in the
returned NotificationResult, never raised. Each notification is written in
its own session so a failure cannot disturb the caller's transaction.

Message templates:
- Application status: APPROVED / REJECTED / ADDITIONAL_INFO_REQUIRED
- Compliance status: COMPLIANT / NON_COMPLIANT
"""

import logging
from dataclasses import dataclass
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cmis_api.database import commit_or_raise
from cmis_api.errors import NotFoundError
from cmis_api.models import ApplicationStatus, Notification, NotificationKind, User
from cmis_api.services.mailer import StatusMailer

logger = logging.getLogger(__name__)

APPLICATION_LINK = "/dashboard/my-applications"
COMPLIANCE_LINK = "/dashboard/compliance"

# status -> (title, message template, kind)
APPLICATION_TEMPLATES = {
    ApplicationStatus.APPROVED: (
        "Application Approved! 🎉",
        'Your application {number} for "{name}" has been approved. '
        "You can now proceed with the next steps.",
        NotificationKind.SUCCESS,
    ),
    ApplicationStatus.REJECTED: (
        "Application Update",
        'Your application {number} for "{name}" requires attention. '
        "Please review the feedback provided.",
        NotificationKind.WARNING,
    ),
    ApplicationStatus.ADDITIONAL_INFO_REQUIRED: (
        "Additional Information Required",
        'Your application {number} for "{name}" requires additional information. '
        "Please provide the requested details.",
        NotificationKind.INFO,
    ),
}

COMPLIANCE_TEMPLATES = {
    "COMPLIANT": (
        "Compliance Report Approved ✓",
        "Compliance report {number} for {name} has been approved.",
        NotificationKind.SUCCESS,
    ),
    "NON_COMPLIANT": (
        "Compliance Issues Detected",
        "Compliance report {number} for {name} has issues that need attention.",
        NotificationKind.ERROR,
    ),
}


@dataclass
class NotificationResult:
    """Outcome of one best-effort notification"""

    user_id: str
    stored: bool = False
    emailed: bool = False
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.stored or self.emailed


class NotificationDispatcher:
    """
    Best-effort notification side channel.

    Args:
        session_factory: Callable returning a new Session (e.g. SessionLocal)
        mailer: Optional StatusMailer; when absent only in-app rows are written
    """

    def __init__(self, session_factory: Callable[[], Session], mailer: StatusMailer | None = None):
        self._session_factory = session_factory
        self.mailer = mailer

    async def notify(
        self,
        user_id: str,
        title: str,
        message: str,
        kind: str = NotificationKind.INFO.value,
        link: str | None = None,
    ) -> NotificationResult:
        """
        Create one in-app notification (and email it when a mailer is set).

        Database and mail failures never raise; they are logged and
        reported on the result. The session is always closed.
        """
        result = NotificationResult(user_id=user_id)
        try:
            kind = NotificationKind(kind).value
        except ValueError:
            result.error = f"Unknown notification type '{kind}'"
            logger.warning("Notification for %s not sent: %s", user_id, result.error)
            return result

        email = None
        db = self._session_factory()
        try:
            try:
                db.add(Notification(user_id=user_id, title=title, message=message, type=kind, link=link))
                db.commit()
                result.stored = True
            except SQLAlchemyError as e:
                db.rollback()
                result.error = f"Failed to store notification: {e.__class__.__name__}"
                logger.warning("Notification for %s not stored: %s", user_id, e)

            if self.mailer:
                try:
                    email = db.query(User.email).filter(User.id == user_id).scalar()
                except SQLAlchemyError as e:
                    logger.warning("Cannot look up email for %s: %s", user_id, e)
        finally:
            db.close()

        if email:
            result.emailed = await self.mailer.send(email, title, message, link)

        return result

    async def notify_application_status(
        self,
        user_id: str | None,
        application_number: str,
        new_status: ApplicationStatus | str,
        proposed_name: str,
    ) -> NotificationResult | None:
        """
        Tell an applicant their application changed status.

        Returns None (sends nothing) when there is no applicant user or the
        status has no template.
        """
        if not user_id:
            return None
        template = APPLICATION_TEMPLATES.get(new_status)
        if template is None:
            return None

        title, message, kind = template
        return await self.notify(
            user_id,
            title,
            message.format(number=application_number, name=proposed_name),
            kind.value,
            APPLICATION_LINK,
        )

    async def notify_compliance_status(
        self,
        admin_ids: list[str],
        report_number: str,
        new_status: str,
        cooperative_name: str,
    ) -> list[NotificationResult]:
        """
        Tell a cooperative's admins about a compliance report decision.

        Recipients are notified one after another; each gets its own result.
        Statuses other than COMPLIANT / NON_COMPLIANT send nothing.
        """
        template = COMPLIANCE_TEMPLATES.get(new_status)
        if template is None:
            return []

        title, message, kind = template
        text = message.format(number=report_number, name=cooperative_name)
        results = []
        for user_id in admin_ids:
            results.append(await self.notify(user_id, title, text, kind.value, COMPLIANCE_LINK))
        return results

    # ========================================
    # Inbox
    # ========================================

    async def list_notifications(
        self, user_id: str, unread_only: bool = False, limit: int = 50
    ) -> list[Notification]:
        """Newest-first notifications for one user"""
        db = self._session_factory()
        try:
            query = db.query(Notification).filter(Notification.user_id == user_id)
            if unread_only:
                query = query.filter(Notification.is_read.is_(False))
            return query.order_by(Notification.created_at.desc()).limit(limit).all()
        finally:
            db.close()

    async def mark_read(self, notification_id: str, user_id: str) -> Notification:
        """
        Mark one of the user's notifications as read.

        Raises:
            NotFoundError: If the notification does not exist or belongs to
                another user
        """
        db = self._session_factory()
        try:
            notification = (
                db.query(Notification)
                .filter(Notification.id == notification_id, Notification.user_id == user_id)
                .first()
            )
            if not notification:
                raise NotFoundError(f"Notification {notification_id} not found")
            notification.is_read = True
            commit_or_raise(db, "mark notification as read")
            db.refresh(notification)
            return notification
        finally:
            db.close()
