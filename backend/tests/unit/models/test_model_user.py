from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from site_inspector.models.user import User, UserRole
from tests.factories.user import AdminFactory, UserFactory


class TestUserModel:
    def test_email_is_normalized(self, session):
        user = UserFactory(email="  Mixed.Case@Example.COM ")
        assert user.email == "mixed.case@example.com"

    def test_malformed_email_rejected(self):
        with pytest.raises(ValueError, match="Email format looks invalid"):
            User(email="not-an-email", username="x", full_name="X")

    def test_password_is_hashed_and_write_only(self, session):
        user = UserFactory(password="S3cret!pass")
        assert user.password_hash != "S3cret!pass"
        assert user.verify_password("S3cret!pass")
        assert not user.verify_password("wrong")
        with pytest.raises(AttributeError):
            _ = user.password

    def test_empty_password_rejected(self):
        user = User(email="a@example.com", username="a", full_name="A")
        with pytest.raises(ValueError):
            user.password = ""

    def test_defaults(self, session):
        user = UserFactory()
        session.flush()
        assert user.role == UserRole.ENGINEER
        assert user.is_active is True
        assert user.is_locked is False
        assert user.login_attempts == 0

    def test_is_admin(self, session):
        assert AdminFactory().is_admin
        assert not UserFactory().is_admin

    def test_unique_email(self, session):
        UserFactory(email="dup@example.com")
        with pytest.raises(IntegrityError):
            UserFactory(email="dup@example.com")

    def test_lock_without_end_is_indefinite(self):
        user = User(email="l@example.com", username="l", full_name="L", is_locked=True)
        assert user.is_locked_at(datetime.now(UTC))

    def test_lock_expires_at_lockout_end(self):
        now = datetime(2024, 1, 1, tzinfo=UTC)
        user = User(
            email="l@example.com",
            username="l",
            full_name="L",
            is_locked=True,
            lockout_end=now,
        )
        assert user.is_locked_at(now - timedelta(seconds=1))
        assert not user.is_locked_at(now)
