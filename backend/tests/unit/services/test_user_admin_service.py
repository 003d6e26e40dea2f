from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from site_inspector.models.refresh_token import RefreshToken, RevocationReason
from site_inspector.services import (
    ErrorKind,
    TokenService,
    UpdateUserStatusIn,
    UserAdminService,
)
from site_inspector.services._shared.errors import InvalidTokenError
from site_inspector.services._shared.ports.token_provider import StubTokenProvider
from site_inspector.services.authorization import Caller
from tests.factories.user import AdminFactory, UserFactory


@pytest.fixture()
def tokens() -> TokenService:
    return TokenService(token_provider=StubTokenProvider())


@pytest.fixture()
def service(tokens) -> UserAdminService:
    return UserAdminService(token_service=tokens)


def _caller(user) -> Caller:
    return Caller(user_id=user.id, role=user.role)


@pytest.fixture()
def admin(session) -> Caller:
    return _caller(AdminFactory())


class TestGetUserStatus:
    def test_admin_reads_status(self, service, admin):
        user = UserFactory(login_attempts=2)
        result = service.get_user_status(admin, user.id)

        assert result.success
        assert result.message == "User status retrieved successfully"
        assert result.data.id == user.id
        assert result.data.is_active is True
        assert result.data.login_attempts == 2

    def test_engineer_and_anonymous_denied(self, service, session):
        user = UserFactory()
        assert service.get_user_status(_caller(user), user.id).kind is ErrorKind.AUTHORIZATION_DENIED
        assert service.get_user_status(None, user.id).kind is ErrorKind.AUTHORIZATION_DENIED

    def test_missing_user(self, service, admin):
        result = service.get_user_status(admin, 424242)
        assert result.kind is ErrorKind.NOT_FOUND
        assert result.message == "User not found"


class TestUpdateUserStatus:
    def test_deactivate_revokes_refresh_tokens(self, service, tokens, admin, session):
        user = UserFactory()
        pair = tokens.issue_tokens(user)

        result = service.update_user_status(admin, user.id, UpdateUserStatusIn(is_active=False))

        assert result.success
        assert result.message == "User status updated successfully"
        assert result.data.is_active is False
        with pytest.raises(InvalidTokenError):
            tokens.validate_and_rotate(pair.refresh_token)
        session.expire_all()
        row = session.query(RefreshToken).filter_by(user_id=user.id).one()
        assert row.revoked_by == RevocationReason.ADMIN.value

    def test_lock_with_end_revokes_refresh_tokens(self, service, tokens, admin):
        user = UserFactory()
        tokens.issue_tokens(user)
        until = datetime.now(UTC) + timedelta(hours=1)

        result = service.update_user_status(
            admin, user.id, UpdateUserStatusIn(is_locked=True, lockout_end=until)
        )

        assert result.data.is_locked is True
        assert result.data.lockout_end == until
        assert tokens.list_active_sessions(user.id) == []

    def test_reactivate_keeps_new_sessions(self, service, tokens, admin):
        user = UserFactory(is_active=False)

        result = service.update_user_status(admin, user.id, UpdateUserStatusIn(is_active=True))
        pair = tokens.issue_tokens(user)

        assert result.data.is_active is True
        assert tokens.validate_and_rotate(pair.refresh_token)

    def test_unlock_leaves_tokens_alone(self, service, tokens, admin):
        user = UserFactory(is_locked=True)
        tokens.issue_tokens(user)

        result = service.update_user_status(admin, user.id, UpdateUserStatusIn(is_locked=False))

        assert result.data.is_locked is False
        assert len(tokens.list_active_sessions(user.id)) == 1

    def test_lockout_end_must_be_in_the_future(self, service, admin):
        user = UserFactory()
        past = datetime.now(UTC) - timedelta(minutes=1)

        result = service.update_user_status(admin, user.id, UpdateUserStatusIn(lockout_end=past))

        assert result.kind is ErrorKind.VALIDATION
        assert result.message == "Lockout end must be in the future"

    def test_engineer_cannot_change_status(self, service, tokens, session):
        user = UserFactory()
        tokens.issue_tokens(user)

        result = service.update_user_status(
            _caller(UserFactory()), user.id, UpdateUserStatusIn(is_active=False)
        )

        assert result.kind is ErrorKind.AUTHORIZATION_DENIED
        assert len(tokens.list_active_sessions(user.id)) == 1

    def test_missing_user(self, service, admin):
        result = service.update_user_status(admin, 424242, UpdateUserStatusIn(is_active=False))
        assert result.kind is ErrorKind.NOT_FOUND
