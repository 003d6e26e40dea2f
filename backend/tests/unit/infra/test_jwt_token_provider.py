from datetime import UTC, datetime, timedelta

from site_inspector.infra.jwt.flask_jwt_token_provider import JWTTokenProvider


def test_roundtrip_carries_claims_issuer_and_audience(app):
    provider = JWTTokenProvider()
    token = provider.create_access_token(
        identity=42,
        additional_claims={"role": "Admin", "email": "a@example.com"},
        expires_delta=timedelta(minutes=60),
    )

    claims = provider.decode(token)

    assert claims["sub"] == "42"
    assert claims["role"] == "Admin"
    assert claims["iss"] == app.config["JWT_ENCODE_ISSUER"]
    assert claims["type"] == "access"


def test_expiry_follows_expires_delta(app):
    provider = JWTTokenProvider()
    before = datetime.now(UTC)
    token = provider.create_access_token(identity=1, expires_delta=timedelta(minutes=5))

    expires_at = datetime.fromtimestamp(provider.decode(token)["exp"], tz=UTC)

    assert before + timedelta(minutes=4) < expires_at <= before + timedelta(minutes=5, seconds=1)
