from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.auth import API, bearer, issue_token, login


@pytest.fixture()
def engineer(session):
    return UserFactory(email="field@example.com")


@pytest.fixture()
def admin(session):
    return AdminFactory()


class TestUserStatusEndpoints:
    def test_admin_reads_status(self, client, admin, engineer):
        response = client.get(f"{API}/users/{engineer.id}/status", headers=bearer(issue_token(admin)))
        body = response.get_json()
        assert response.status_code == 200
        assert body["message"] == "User status retrieved successfully"
        assert body["data"]["id"] == engineer.id
        assert body["data"]["is_active"] is True
        assert body["data"]["is_locked"] is False

    def test_engineer_gets_403(self, client, engineer):
        response = client.get(
            f"{API}/users/{engineer.id}/status", headers=bearer(issue_token(engineer))
        )
        assert response.status_code == 403
        assert response.get_json()["message"] == "Insufficient role"

    def test_missing_user_is_404(self, client, admin):
        response = client.get(f"{API}/users/987654/status", headers=bearer(issue_token(admin)))
        assert response.status_code == 404
        assert response.get_json()["message"] == "User not found"

    def test_deactivation_kills_refresh_tokens(self, client, admin, engineer):
        tokens = login(client, engineer.email)

        response = client.put(
            f"{API}/users/{engineer.id}/status",
            headers=bearer(issue_token(admin)),
            json={"is_active": False},
        )
        assert response.status_code == 200
        assert response.get_json()["data"]["is_active"] is False

        refresh = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert refresh.status_code == 401

    def test_lock_until_future_instant(self, client, admin, engineer):
        until = (datetime.now(UTC) + timedelta(hours=2)).replace(microsecond=0)

        response = client.put(
            f"{API}/users/{engineer.id}/status",
            headers=bearer(issue_token(admin)),
            json={"is_locked": True, "lockout_end": until.isoformat()},
        )

        data = response.get_json()["data"]
        assert response.status_code == 200
        assert data["is_locked"] is True
        assert datetime.fromisoformat(data["lockout_end"]) == until

    def test_past_lockout_end_is_400(self, client, admin, engineer):
        past = (datetime.now(UTC) - timedelta(hours=1)).isoformat()
        response = client.put(
            f"{API}/users/{engineer.id}/status",
            headers=bearer(issue_token(admin)),
            json={"is_locked": True, "lockout_end": past},
        )
        assert response.status_code == 400
        assert response.get_json()["message"] == "Lockout end must be in the future"

    def test_empty_body_is_400(self, client, admin, engineer):
        response = client.put(
            f"{API}/users/{engineer.id}/status", headers=bearer(issue_token(admin)), json={}
        )
        assert response.status_code == 400
        assert response.get_json()["message"] == "Validation failed"
