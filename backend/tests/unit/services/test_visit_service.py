from __future__ import annotations

import pytest

from site_inspector.models.user import UserRole
from site_inspector.models.visit import Visit, VisitStatus
from site_inspector.services import ChangeStatusIn, ErrorKind, VisitService
from site_inspector.services.authorization import Caller
from tests.factories.user import AdminFactory, UserFactory
from tests.factories.visit import VisitFactory


@pytest.fixture()
def service() -> VisitService:
    return VisitService()


def _caller(user) -> Caller:
    return Caller(user_id=user.id, role=user.role)


class TestGetVisit:
    def test_owner_reads_visit(self, service, session):
        visit = VisitFactory()
        result = service.get_visit(Caller(user_id=visit.user_id, role=UserRole.ENGINEER), visit.id)
        assert result.success
        assert result.message == "Visit retrieved successfully"
        assert result.data.id == visit.id

    def test_other_engineer_denied(self, service, session):
        visit = VisitFactory()
        result = service.get_visit(_caller(UserFactory()), visit.id)
        assert result.kind is ErrorKind.AUTHORIZATION_DENIED
        assert result.message == "Access denied"
        assert result.data is None

    def test_missing_visit_is_not_found_for_engineers_and_admins(self, service, session):
        assert service.get_visit(_caller(UserFactory()), 987654).kind is ErrorKind.NOT_FOUND
        assert service.get_visit(_caller(AdminFactory()), 987654).kind is ErrorKind.NOT_FOUND

    def test_no_caller_denied(self, service, session):
        visit = VisitFactory()
        assert service.get_visit(None, visit.id).kind is ErrorKind.AUTHORIZATION_DENIED


class TestUpdateNotes:
    def test_owner_updates_notes(self, service, session):
        visit = VisitFactory()
        result = service.update_notes(
            Caller(user_id=visit.user_id, role=UserRole.ENGINEER), visit.id, "Replaced antenna"
        )
        assert result.success
        assert result.data.notes == "Replaced antenna"

    def test_other_engineer_cannot_edit(self, service, session):
        visit = VisitFactory(notes="original")
        visit_id = visit.id
        result = service.update_notes(_caller(UserFactory()), visit_id, "hijacked")
        assert result.kind is ErrorKind.AUTHORIZATION_DENIED
        session.expire_all()
        assert session.get(Visit, visit_id).notes == "original"

    def test_closed_visit_is_frozen(self, service, session):
        visit = VisitFactory(status=VisitStatus.ACCEPTED)
        result = service.update_notes(_caller(AdminFactory()), visit.id, "late edit")
        assert result.kind is ErrorKind.VALIDATION


class TestChangeStatus:
    def test_admin_accepts_and_is_recorded_as_reviewer(self, service, session):
        admin = AdminFactory()
        visit = VisitFactory(status=VisitStatus.COMPLETED)

        result = service.change_status(_caller(admin), visit.id, ChangeStatusIn(status="Accepted"))

        assert result.success
        assert result.message == "Visit status updated successfully"
        assert result.data.status == "Accepted"
        assert result.data.reviewed_by_id == admin.id
        assert result.data.reviewed_at is not None

    def test_engineer_cannot_change_status_even_on_own_visit(self, service, session):
        visit = VisitFactory()
        owner = Caller(user_id=visit.user_id, role=UserRole.ENGINEER)
        result = service.change_status(owner, visit.id, ChangeStatusIn(status="Accepted"))
        assert result.kind is ErrorKind.AUTHORIZATION_DENIED

    def test_rejection_requires_reason(self, service, session):
        visit = VisitFactory()
        result = service.change_status(
            _caller(AdminFactory()), visit.id, ChangeStatusIn(status="Rejected", rejection_reason="  ")
        )
        assert result.message == "Rejection reason is required when rejecting a visit"

    def test_rejection_stores_reason(self, service, session):
        visit = VisitFactory()
        result = service.change_status(
            _caller(AdminFactory()),
            visit.id,
            ChangeStatusIn(status="Rejected", rejection_reason="Photos missing"),
        )
        assert result.data.rejection_reason == "Photos missing"

    def test_invalid_status(self, service, session):
        visit = VisitFactory()
        result = service.change_status(_caller(AdminFactory()), visit.id, ChangeStatusIn(status="Done"))
        assert result.message == "Invalid status"
        assert result.errors[0].startswith("Status must be one of:")

    def test_missing_visit(self, service, session):
        result = service.change_status(
            _caller(AdminFactory()), 987654, ChangeStatusIn(status="Accepted")
        )
        assert result.kind is ErrorKind.NOT_FOUND

