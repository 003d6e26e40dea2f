from __future__ import annotations

import pytest

from site_inspector.services import ErrorKind, SiteService
from site_inspector.services.authorization import Caller
from tests.factories.site import SiteFactory
from tests.factories.user import AdminFactory, UserFactory
from tests.factories.visit import VisitFactory


@pytest.fixture()
def service() -> SiteService:
    return SiteService()


def _caller(user) -> Caller:
    return Caller(user_id=user.id, role=user.role)


def test_engineer_with_visit_reads_site(service, session):
    engineer = UserFactory()
    site = SiteFactory(name="North Ridge")
    VisitFactory(user=engineer, site=site)

    result = service.get_site(_caller(engineer), site.id)

    assert result.success
    assert result.message == "Site retrieved successfully"
    assert result.data.name == "North Ridge"
    assert result.data.status == "Active"


def test_engineer_without_visit_denied(service, session):
    site = SiteFactory()
    assert service.get_site(_caller(UserFactory()), site.id).kind is ErrorKind.AUTHORIZATION_DENIED


def test_engineer_probing_missing_site_gets_denied(service, session):
    assert service.get_site(_caller(UserFactory()), 987654).kind is ErrorKind.AUTHORIZATION_DENIED


def test_admin_reads_any_site_and_sees_not_found(service, session):
    admin = _caller(AdminFactory())
    site = SiteFactory()
    assert service.get_site(admin, site.id).success
    assert service.get_site(admin, 987654).kind is ErrorKind.NOT_FOUND
