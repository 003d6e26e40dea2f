from __future__ import annotations

from sqlalchemy.exc import OperationalError

from site_inspector.repositories.user import UserRepository
from tests.factories.user import DEFAULT_PASSWORD
from tests.helpers.auth import API


def test_unknown_route_uses_envelope(client):
    response = client.get(f"{API}/nowhere")
    body = response.get_json()
    assert response.status_code == 404
    assert body["success"] is False
    assert body["data"] is None
    assert body["message"] == f"Route '{API}/nowhere' not found"


def test_store_outage_is_generic_500(client, monkeypatch):
    def _down(self, email):
        raise OperationalError("SELECT users", {}, Exception("could not connect to server"))

    monkeypatch.setattr(UserRepository, "get_by_email", _down)
    response = client.post(
        f"{API}/auth/login", json={"email": "a@example.com", "password": DEFAULT_PASSWORD}
    )

    body = response.get_json()
    assert response.status_code == 500
    assert body["message"] == "An unexpected error occurred"
    assert "could not connect" not in response.get_data(as_text=True)
    assert body["request_id"]


def test_non_json_body_is_validation_error(client):
    response = client.post(f"{API}/auth/login", data="not json", content_type="text/plain")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Validation failed"
