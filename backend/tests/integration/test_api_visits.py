from __future__ import annotations

import pytest

from site_inspector.models.visit import VisitStatus
from tests.factories.site import SiteFactory
from tests.factories.user import AdminFactory, UserFactory
from tests.factories.visit import VisitFactory
from tests.helpers.auth import API, bearer, issue_token


@pytest.fixture()
def engineer(session):
    return UserFactory()


@pytest.fixture()
def admin(session):
    return AdminFactory()


@pytest.fixture()
def own_visit(engineer):
    return VisitFactory(user=engineer, status=VisitStatus.IN_PROGRESS)


class TestVisitEndpoints:
    def test_owner_reads_visit(self, client, engineer, own_visit):
        response = client.get(f"{API}/visits/{own_visit.id}", headers=bearer(issue_token(engineer)))
        body = response.get_json()
        assert response.status_code == 200
        assert body["data"]["id"] == own_visit.id
        assert body["data"]["status"] == "InProgress"

    def test_other_engineer_gets_403(self, client, own_visit):
        stranger = UserFactory()
        response = client.get(f"{API}/visits/{own_visit.id}", headers=bearer(issue_token(stranger)))
        assert response.status_code == 403
        assert response.get_json()["message"] == "Access denied"

    def test_missing_visit_is_404(self, client, engineer):
        response = client.get(f"{API}/visits/987654", headers=bearer(issue_token(engineer)))
        assert response.status_code == 404
        assert response.get_json()["message"] == "Visit not found"

    def test_admin_reads_any_visit(self, client, admin, own_visit):
        response = client.get(f"{API}/visits/{own_visit.id}", headers=bearer(issue_token(admin)))
        assert response.status_code == 200

    def test_owner_edits_notes(self, client, engineer, own_visit):
        response = client.patch(
            f"{API}/visits/{own_visit.id}/notes",
            headers=bearer(issue_token(engineer)),
            json={"notes": "Cable trays inspected"},
        )
        assert response.status_code == 200
        assert response.get_json()["data"]["notes"] == "Cable trays inspected"

    def test_engineer_cannot_change_status(self, client, engineer, own_visit):
        response = client.put(
            f"{API}/visits/{own_visit.id}/status",
            headers=bearer(issue_token(engineer)),
            json={"status": "Accepted"},
        )
        assert response.status_code == 403
        assert response.get_json()["message"] == "Insufficient role"

    def test_admin_rejects_with_reason(self, client, admin, own_visit):
        response = client.put(
            f"{API}/visits/{own_visit.id}/status",
            headers=bearer(issue_token(admin)),
            json={"status": "Rejected", "rejection_reason": "Blurry photos"},
        )
        data = response.get_json()["data"]
        assert response.status_code == 200
        assert data["status"] == "Rejected"
        assert data["rejection_reason"] == "Blurry photos"
        assert data["reviewed_by_id"] == admin.id

    def test_admin_reject_without_reason_is_400(self, client, admin, own_visit):
        response = client.put(
            f"{API}/visits/{own_visit.id}/status",
            headers=bearer(issue_token(admin)),
            json={"status": "Rejected"},
        )
        assert response.status_code == 400


class TestSiteEndpoints:
    def test_engineer_with_visit_reads_site(self, client, engineer, own_visit):
        response = client.get(f"{API}/sites/{own_visit.site_id}", headers=bearer(issue_token(engineer)))
        assert response.status_code == 200
        assert response.get_json()["data"]["id"] == own_visit.site_id

    def test_engineer_without_visit_gets_403(self, client, engineer):
        site = SiteFactory()
        response = client.get(f"{API}/sites/{site.id}", headers=bearer(issue_token(engineer)))
        assert response.status_code == 403

    def test_admin_gets_404_for_missing_site(self, client, admin):
        response = client.get(f"{API}/sites/987654", headers=bearer(issue_token(admin)))
        assert response.status_code == 404
        assert response.get_json()["message"] == "Site not found"

    def test_requires_authentication(self, client):
        assert client.get(f"{API}/sites/1").status_code == 401
