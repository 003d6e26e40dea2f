from datetime import UTC, datetime

import pytest

from site_inspector.repositories.user import UserRepository
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> UserRepository:
    return UserRepository(session=session)


class TestUserRepository:
    def test_get_by_email_is_case_insensitive(self, repo):
        user = UserFactory(email="case@example.com")
        assert repo.get_by_email("  CASE@example.com ").id == user.id

    def test_exists_helpers(self, repo):
        UserFactory(email="taken@example.com", username="Taken")
        assert repo.exists_by_email("TAKEN@example.com")
        assert repo.exists_by_username("taken")
        assert not repo.exists_by_email("free@example.com")
        assert not repo.exists_by_username("free")

    def test_update_password_rehashes(self, repo):
        user = UserFactory()
        old_hash = user.password_hash
        repo.update_password(user, "N3w!password")
        assert user.password_hash != old_hash
        assert user.verify_password("N3w!password")

    def test_login_bookkeeping(self, repo):
        user = UserFactory()
        assert repo.record_failed_login(user) == 1
        assert repo.record_failed_login(user) == 2

        at = datetime(2024, 1, 1, tzinfo=UTC)
        repo.record_successful_login(user, at=at, ip_address="10.0.0.1")
        assert user.login_attempts == 0
        assert user.last_login_ip == "10.0.0.1"
