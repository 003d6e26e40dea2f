"""Helpers for authenticating requests in API tests."""

from __future__ import annotations

from typing import Any

from flask_jwt_extended import create_access_token

from site_inspector.services.tokens.service import access_claims
from tests.factories.user import DEFAULT_PASSWORD

API = "/api/v1"


def bearer(token: str) -> dict[str, str]:
    """Authorization header for ``token``."""
    return {"Authorization": f"Bearer {token}"}


def issue_token(user) -> str:
    """Sign an access token for ``user`` without going through the login flow.

    Must run inside an application context.
    """
    return create_access_token(identity=str(user.id), additional_claims=access_claims(user))


def login(client, email: str, password: str = DEFAULT_PASSWORD) -> dict[str, Any]:
    """Log in through the API and return the ``tokens`` payload."""
    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.get_json()
    return response.get_json()["data"]["tokens"]
