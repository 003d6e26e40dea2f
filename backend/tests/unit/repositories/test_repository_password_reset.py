from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, select

from site_inspector.models.password_reset import PasswordResetToken
from site_inspector.repositories.password_reset import PasswordResetTokenRepository
from site_inspector.services.tokens.service import hash_token
from tests.factories.user import UserFactory

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def repo(session) -> PasswordResetTokenRepository:
    return PasswordResetTokenRepository(session=session)


@pytest.fixture()
def user(session):
    return UserFactory()


def _add(repo, user, raw: str, *, expires_at=None) -> PasswordResetToken:
    return repo.add(
        PasswordResetToken(
            user_id=user.id,
            token_hash=hash_token(raw),
            expires_at=expires_at or NOW + timedelta(minutes=30),
            created_at=NOW,
        )
    )


class TestPasswordResetTokenRepository:
    def test_get_active_matches_owner_and_hash(self, repo, user):
        row = _add(repo, user, "reset-1")
        found = repo.get_active(user_id=user.id, token_hash=hash_token("reset-1"), now=NOW)
        assert found is not None and found.id == row.id
        assert repo.get_active(user_id=user.id + 1, token_hash=hash_token("reset-1"), now=NOW) is None

    def test_expired_token_is_not_active(self, repo, user):
        _add(repo, user, "reset-1", expires_at=NOW)
        assert repo.get_active(user_id=user.id, token_hash=hash_token("reset-1"), now=NOW) is None

    def test_consume_is_single_use(self, repo, user):
        row = _add(repo, user, "reset-1")
        assert repo.consume(row.id, now=NOW) is True
        assert repo.consume(row.id, now=NOW) is False
        assert repo.get_active(user_id=user.id, token_hash=hash_token("reset-1"), now=NOW) is None

    def test_invalidate_for_user_burns_outstanding_tokens(self, repo, user):
        _add(repo, user, "reset-1")
        _add(repo, user, "reset-2")
        assert repo.invalidate_for_user(user.id, now=NOW) == 2
        assert repo.get_active(user_id=user.id, token_hash=hash_token("reset-2"), now=NOW) is None

    def test_delete_expired(self, repo, user, session):
        _add(repo, user, "old", expires_at=NOW - timedelta(minutes=1))
        _add(repo, user, "fresh")
        assert repo.delete_expired(now=NOW) == 1
        session.expire_all()
        assert session.scalar(select(func.count()).select_from(PasswordResetToken)) == 1
