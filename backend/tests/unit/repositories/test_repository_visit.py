import pytest

from site_inspector.repositories.visit import VisitRepository
from tests.factories.site import SiteFactory
from tests.factories.user import UserFactory
from tests.factories.visit import VisitFactory


@pytest.fixture()
def repo(session) -> VisitRepository:
    return VisitRepository(session=session)


class TestVisitRepository:
    def test_get_owner_id(self, repo):
        visit = VisitFactory()
        assert repo.get_owner_id(visit.id) == visit.user_id

    def test_get_owner_id_missing_visit(self, repo):
        assert repo.get_owner_id(999_999) is None

    def test_user_has_visit_at_site(self, repo):
        engineer = UserFactory()
        site = SiteFactory()
        other_site = SiteFactory()
        VisitFactory(user=engineer, site=site)

        assert repo.user_has_visit_at_site(engineer.id, site.id)
        assert not repo.user_has_visit_at_site(engineer.id, other_site.id)
        assert not repo.user_has_visit_at_site(UserFactory().id, site.id)
