"""
Unit tests for the notification dispatcher.

Tests message templates, best-effort delivery (failures reported, never
raised), email hand-off and the in-app inbox.
"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from cmis_api.errors import NotFoundError
from cmis_api.models import ApplicationStatus, Notification
from cmis_api.services import NotificationDispatcher

from tests.fixtures.factories import create_user
from tests.mocks.mock_mailer import create_mock_mailer


def _stored(session_factory):
    db = session_factory()
    try:
        return db.query(Notification).order_by(Notification.created_at).all()
    finally:
        db.close()


class TestNotify:
    """Test NotificationDispatcher.notify."""

    @pytest.mark.asyncio
    async def test_stores_notification(self, dispatcher, session_factory, citizen):
        result = await dispatcher.notify(citizen.id, "Hello", "World", "success", "/dashboard")

        assert result.stored is True
        assert result.emailed is False
        assert result.delivered is True
        assert result.error is None

        rows = _stored(session_factory)
        assert len(rows) == 1
        assert rows[0].title == "Hello"
        assert rows[0].type == "success"
        assert rows[0].link == "/dashboard"
        assert rows[0].is_read is False

    @pytest.mark.asyncio
    async def test_unknown_kind(self, dispatcher, session_factory, citizen):
        result = await dispatcher.notify(citizen.id, "Hello", "World", "urgent")

        assert result.delivered is False
        assert "urgent" in result.error
        assert _stored(session_factory) == []

    @pytest.mark.asyncio
    async def test_store_failure_is_reported_not_raised(self, test_engine, session_factory, citizen):
        """A missing notifications table does not raise."""
        Notification.__table__.drop(bind=test_engine)
        dispatcher = NotificationDispatcher(session_factory)

        result = await dispatcher.notify(citizen.id, "Hello", "World")

        assert result.stored is False
        assert result.delivered is False
        assert result.error.startswith("Failed to store notification")

    @pytest.mark.asyncio
    async def test_store_failure_still_emails(self, session_factory, citizen):
        session = session_factory()
        session.commit = MagicMock(side_effect=OperationalError("INSERT", {}, Exception("locked")))
        mailer = create_mock_mailer()
        dispatcher = NotificationDispatcher(lambda: session, mailer)

        result = await dispatcher.notify(citizen.id, "Hello", "World")

        assert result.stored is False
        assert result.emailed is True
        assert result.delivered is True
        mailer.send.assert_awaited_once_with("wanjiku@example.com", "Hello", "World", None)

    @pytest.mark.asyncio
    async def test_session_closed_after_store_failure(self, session_factory, citizen):
        session = session_factory()
        session.commit = MagicMock(side_effect=OperationalError("INSERT", {}, Exception("locked")))
        session.close = MagicMock(wraps=session.close)
        dispatcher = NotificationDispatcher(lambda: session)

        await dispatcher.notify(citizen.id, "Hello", "World")

        session.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_session_closed_on_unexpected_error(self, citizen):
        """Errors outside the database layer propagate but never leak the session."""
        session = MagicMock()
        session.add.side_effect = RuntimeError("mapper misconfigured")
        mailer = create_mock_mailer()
        dispatcher = NotificationDispatcher(lambda: session, mailer)

        with pytest.raises(RuntimeError):
            await dispatcher.notify(citizen.id, "Hello", "World")

        session.close.assert_called_once()
        mailer.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_emails_when_mailer_configured(self, session_factory, citizen):
        mailer = create_mock_mailer()
        dispatcher = NotificationDispatcher(session_factory, mailer)

        result = await dispatcher.notify(citizen.id, "Approved", "Body", "success", "/dashboard/my-applications")

        assert result.stored is True
        assert result.emailed is True
        mailer.send.assert_awaited_once_with(
            "wanjiku@example.com", "Approved", "Body", "/dashboard/my-applications"
        )

    @pytest.mark.asyncio
    async def test_mail_relay_failure(self, session_factory, citizen):
        mailer = create_mock_mailer(send_result=False)
        dispatcher = NotificationDispatcher(session_factory, mailer)

        result = await dispatcher.notify(citizen.id, "Approved", "Body")

        assert result.stored is True
        assert result.emailed is False


class TestApplicationStatus:
    """Test application status templates."""

    @pytest.mark.asyncio
    async def test_approved(self, dispatcher, session_factory, citizen):
        result = await dispatcher.notify_application_status(
            citizen.id, "APP-2025-0007", ApplicationStatus.APPROVED, "Umoja Dairy"
        )

        assert result.stored is True
        row = _stored(session_factory)[0]
        assert row.title == "Application Approved! 🎉"
        assert row.message == (
            'Your application APP-2025-0007 for "Umoja Dairy" has been approved. '
            "You can now proceed with the next steps."
        )
        assert row.type == "success"
        assert row.link == "/dashboard/my-applications"

    @pytest.mark.asyncio
    async def test_rejected(self, dispatcher, session_factory, citizen):
        await dispatcher.notify_application_status(
            citizen.id, "APP-2025-0008", ApplicationStatus.REJECTED, "Umoja Dairy"
        )

        row = _stored(session_factory)[0]
        assert row.title == "Application Update"
        assert "requires attention" in row.message
        assert row.type == "warning"

    @pytest.mark.asyncio
    async def test_info_required_accepts_string_status(self, dispatcher, session_factory, citizen):
        await dispatcher.notify_application_status(
            citizen.id, "APP-2025-0009", "ADDITIONAL_INFO_REQUIRED", "Umoja Dairy"
        )

        row = _stored(session_factory)[0]
        assert row.title == "Additional Information Required"
        assert row.type == "info"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status",
        [ApplicationStatus.DRAFT, ApplicationStatus.SUBMITTED, ApplicationStatus.UNDER_REVIEW],
    )
    async def test_untemplated_status_is_noop(self, dispatcher, session_factory, citizen, status):
        result = await dispatcher.notify_application_status(citizen.id, "APP-1", status, "Umoja")

        assert result is None
        assert _stored(session_factory) == []

    @pytest.mark.asyncio
    async def test_no_applicant_is_noop(self, dispatcher, session_factory, test_db):
        result = await dispatcher.notify_application_status(None, "APP-1", ApplicationStatus.APPROVED, "Umoja")

        assert result is None


class TestComplianceStatus:
    """Test compliance report fan-out."""

    @pytest.mark.asyncio
    async def test_each_admin_notified(self, dispatcher, session_factory, test_db, county_tenant):
        admins = [create_user(test_db, county_tenant, full_name=f"Coop Admin {i}") for i in range(3)]

        results = await dispatcher.notify_compliance_status(
            [a.id for a in admins], "CR-2025-011", "NON_COMPLIANT", "Umoja Dairy"
        )

        assert len(results) == 3
        assert all(r.stored for r in results)
        rows = _stored(session_factory)
        assert {r.user_id for r in rows} == {a.id for a in admins}
        assert all(r.title == "Compliance Issues Detected" for r in rows)
        assert all(r.type == "error" for r in rows)
        assert all(r.link == "/dashboard/compliance" for r in rows)
        assert rows[0].message == "Compliance report CR-2025-011 for Umoja Dairy has issues that need attention."

    @pytest.mark.asyncio
    async def test_compliant(self, dispatcher, session_factory, citizen):
        await dispatcher.notify_compliance_status([citizen.id], "CR-1", "COMPLIANT", "Umoja")

        row = _stored(session_factory)[0]
        assert row.title == "Compliance Report Approved ✓"
        assert row.type == "success"

    @pytest.mark.asyncio
    async def test_other_status_is_noop(self, dispatcher, session_factory, citizen):
        results = await dispatcher.notify_compliance_status([citizen.id], "CR-1", "PENDING", "Umoja")

        assert results == []
        assert _stored(session_factory) == []


class TestInbox:
    """Test listing and marking notifications read."""

    @pytest.mark.asyncio
    async def test_newest_first_and_unread_filter(self, dispatcher, session_factory, citizen):
        db = session_factory()
        now = datetime.utcnow()
        db.add_all(
            [
                Notification(user_id=citizen.id, title="Old", message="m", created_at=now - timedelta(hours=2)),
                Notification(
                    user_id=citizen.id, title="Read", message="m", is_read=True, created_at=now - timedelta(hours=1)
                ),
                Notification(user_id=citizen.id, title="New", message="m", created_at=now),
            ]
        )
        db.commit()
        db.close()

        everything = await dispatcher.list_notifications(citizen.id)
        unread = await dispatcher.list_notifications(citizen.id, unread_only=True)

        assert [n.title for n in everything] == ["New", "Read", "Old"]
        assert [n.title for n in unread] == ["New", "Old"]

    @pytest.mark.asyncio
    async def test_mark_read(self, dispatcher, session_factory, citizen):
        await dispatcher.notify(citizen.id, "Hello", "World")
        notification = _stored(session_factory)[0]

        updated = await dispatcher.mark_read(notification.id, citizen.id)

        assert updated.is_read is True
        assert _stored(session_factory)[0].is_read is True

    @pytest.mark.asyncio
    async def test_mark_read_other_users_notification(self, dispatcher, session_factory, citizen, county_officer):
        await dispatcher.notify(citizen.id, "Hello", "World")
        notification = _stored(session_factory)[0]

        with pytest.raises(NotFoundError):
            await dispatcher.mark_read(notification.id, county_officer.id)
