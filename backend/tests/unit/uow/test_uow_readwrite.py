import pytest

from site_inspector.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWork:
    def test_commits_on_clean_exit(self, session):
        with RWuow() as uow:
            user = UserFactory.build(email="kept@example.com")
            uow.users.add(user)

        session.expire_all()
        with RWuow() as uow:
            assert uow.users.get_by_email("kept@example.com") is not None

    def test_rolls_back_when_block_raises(self, session):
        with pytest.raises(ValueError, match="boom"), RWuow() as uow:
            uow.users.add(UserFactory.build(email="gone@example.com"))
            raise ValueError("boom")

        with RWuow() as uow:
            assert uow.users.get_by_email("gone@example.com") is None

    def test_repositories_share_the_session(self, session):
        with RWuow() as uow:
            assert uow.users.session is uow.visits.session is uow.refresh_tokens.session
