"""
Integration tests for applications router.

Tests the review queue and reviewer actions at /api/v1/applications.
"""

import pytest
from datetime import datetime, timedelta

from cmis_api.config import get_app_config
from cmis_api.models import ApplicationStatus, Cooperative, Notification
from cmis_api.services.workflow import local_now

from tests.fixtures.factories import create_application, create_cooperative_type


class TestListApplications:
    """Test GET /api/v1/applications endpoint."""

    def test_requires_reviewer_role(self, client, citizen_headers):
        response = client.get("/api/v1/applications", headers=citizen_headers)
        assert response.status_code == 403

    def test_county_admin_sees_own_county(
        self, client, county_admin_headers, test_db, county_tenant, other_county
    ):
        create_application(test_db, county_tenant, application_number="APP-NRB-1")
        create_application(test_db, other_county, application_number="APP-MSA-1")

        response = client.get("/api/v1/applications", headers=county_admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert [a["application_number"] for a in data["data"]] == ["APP-NRB-1"]
        assert data["data"][0]["tenant_name"] == "Nairobi County"
        assert data["pagination"]["total_items"] == 1

    def test_officer_can_read(self, client, officer_headers, test_db, county_tenant):
        create_application(test_db, county_tenant)

        response = client.get("/api/v1/applications", headers=officer_headers)

        assert response.status_code == 200
        assert response.json()["pagination"]["total_items"] == 1

    def test_super_admin_filters(self, client, admin_headers, test_db, county_tenant, other_county):
        sacco = create_cooperative_type(test_db)
        create_application(test_db, county_tenant, cooperative_type=sacco)
        create_application(test_db, other_county, cooperative_type=sacco)
        create_application(test_db, other_county, status=ApplicationStatus.APPROVED)

        response = client.get(
            f"/api/v1/applications?county_id={other_county.id}&status=SUBMITTED",
            headers=admin_headers,
        )

        data = response.json()
        assert response.status_code == 200
        assert len(data["data"]) == 1
        assert data["data"][0]["type_name"] == "SACCO"
        assert data["data"][0]["status"] == "SUBMITTED"

    def test_newest_first(self, client, admin_headers, test_db, county_tenant):
        now = datetime.utcnow()
        create_application(test_db, county_tenant, application_number="APP-A", submitted_at=now - timedelta(days=3))
        create_application(test_db, county_tenant, application_number="APP-B", submitted_at=now)

        response = client.get("/api/v1/applications", headers=admin_headers)

        assert [a["application_number"] for a in response.json()["data"]] == ["APP-B", "APP-A"]

    def test_empty_queue(self, client, admin_headers):
        response = client.get("/api/v1/applications", headers=admin_headers)

        pagination = response.json()["pagination"]
        assert pagination["total_items"] == 0
        assert pagination["total_pages"] == 0
        assert pagination["has_next"] is False

    def test_invalid_status(self, client, admin_headers):
        response = client.get("/api/v1/applications?status=LOST", headers=admin_headers)
        assert response.status_code == 422


class TestGetApplication:
    """Test GET /api/v1/applications/{id} endpoint."""

    def test_detail_with_documents(self, client, admin_headers, test_db, county_tenant, document_storage):
        (document_storage.root / "app-1").mkdir(parents=True)
        (document_storage.root / "app-1" / "bylaws.pdf").write_bytes(b"%PDF-1.4 bylaws")
        application = create_application(test_db, county_tenant, bylaws_url="app-1/bylaws.pdf")

        response = client.get(f"/api/v1/applications/{application.id}", headers=admin_headers)

        assert response.status_code == 200
        documents = {d["field"]: d for d in response.json()["data"]["documents"]}
        assert len(documents) == 4
        assert documents["bylaws_url"]["uploaded"] is True
        assert documents["minutes_url"]["uploaded"] is False

        download = client.get(documents["bylaws_url"]["url"])
        assert download.status_code == 200
        assert download.content == b"%PDF-1.4 bylaws"

    def test_other_county_is_not_found(self, client, county_admin_headers, test_db, other_county):
        application = create_application(test_db, other_county)

        response = client.get(f"/api/v1/applications/{application.id}", headers=county_admin_headers)

        assert response.status_code == 404


class TestApprove:
    """Test POST /api/v1/applications/{id}/approve endpoint."""

    def test_approve(self, client, county_admin_headers, county_admin, test_db, county_tenant, citizen):
        application = create_application(test_db, county_tenant, applicant=citizen)

        response = client.post(f"/api/v1/applications/{application.id}/approve", headers=county_admin_headers)

        assert response.status_code == 200
        data = response.json()
        year = local_now(get_app_config().application.timezone).year
        expected_number = f"COOP-{year}-00001"
        assert data["data"]["registration_number"] == expected_number
        assert expected_number in data["message"]

        test_db.expire_all()
        assert test_db.query(Cooperative).count() == 1
        notification = test_db.query(Notification).filter(Notification.user_id == citizen.id).one()
        assert notification.type == "success"

    def test_officer_cannot_approve(self, client, officer_headers, test_db, county_tenant):
        application = create_application(test_db, county_tenant)

        response = client.post(f"/api/v1/applications/{application.id}/approve", headers=officer_headers)

        assert response.status_code == 403

    def test_already_approved(self, client, admin_headers, test_db, county_tenant):
        application = create_application(test_db, county_tenant, status=ApplicationStatus.APPROVED)

        response = client.post(f"/api/v1/applications/{application.id}/approve", headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_other_county_cannot_approve(self, client, county_admin_headers, test_db, other_county):
        application = create_application(test_db, other_county)

        response = client.post(f"/api/v1/applications/{application.id}/approve", headers=county_admin_headers)

        assert response.status_code == 404
        test_db.expire_all()
        assert test_db.query(Cooperative).count() == 0


class TestRejectAndRequestInfo:
    """Test reject and request-info endpoints."""

    def test_reject(self, client, admin_headers, test_db, county_tenant):
        application = create_application(test_db, county_tenant)

        response = client.post(
            f"/api/v1/applications/{application.id}/reject",
            json={"reason": "Minutes are missing signatures"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "REJECTED"

    def test_reject_requires_reason(self, client, admin_headers, test_db, county_tenant):
        application = create_application(test_db, county_tenant)

        response = client.post(
            f"/api/v1/applications/{application.id}/reject",
            json={"reason": ""},
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_request_info(self, client, county_admin_headers, test_db, county_tenant):
        application = create_application(test_db, county_tenant, status=ApplicationStatus.UNDER_REVIEW)

        response = client.post(
            f"/api/v1/applications/{application.id}/request-info",
            json={"notes": "Attach ID copies for all officials"},
            headers=county_admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "ADDITIONAL_INFO_REQUIRED"


class TestCooperativeTypes:
    """Test GET /api/v1/cooperative-types endpoint."""

    def test_list(self, client, officer_headers, test_db):
        create_cooperative_type(test_db, name="Dairy", category="Agricultural")
        create_cooperative_type(test_db, name="Boda Boda", category="Transport")

        response = client.get("/api/v1/cooperative-types", headers=officer_headers)

        assert response.status_code == 200
        assert [t["name"] for t in response.json()["data"]] == ["Boda Boda", "Dairy"]
