"""Pure decision tests: no database, facts come from an in-memory lookup."""

from __future__ import annotations

import pytest

from site_inspector.models.user import UserRole
from site_inspector.services.authorization import (
    AccessCheck,
    Caller,
    DenyReason,
    ManagementAction,
    decide,
)

ENGINEER = Caller(user_id=1, role=UserRole.ENGINEER)
OTHER_ENGINEER = Caller(user_id=2, role=UserRole.ENGINEER)
ADMIN = Caller(user_id=99, role=UserRole.ADMIN)

OWN_VISIT, FOREIGN_VISIT, MISSING_VISIT = 10, 20, 30
SITE_WITH_VISIT, SITE_WITHOUT_VISIT = 100, 200


class FakeLookup:
    """Visits 10 (owned by user 1) and 20 (owned by user 2); user 1 visited site 100."""

    def __init__(self) -> None:
        self.owners = {OWN_VISIT: 1, FOREIGN_VISIT: 2}
        self.visited = {(1, SITE_WITH_VISIT)}
        self.calls = 0

    def visit_owner_id(self, visit_id: int) -> int | None:
        self.calls += 1
        return self.owners.get(visit_id)

    def has_visit_at_site(self, user_id: int, site_id: int) -> bool:
        self.calls += 1
        return (user_id, site_id) in self.visited


@pytest.fixture()
def lookup() -> FakeLookup:
    return FakeLookup()


ALL_CHECKS = [
    AccessCheck.ownership(OWN_VISIT),
    AccessCheck.derived_access(SITE_WITH_VISIT),
    AccessCheck.management(OWN_VISIT, ManagementAction.EDIT),
    AccessCheck.management(OWN_VISIT, ManagementAction.CHANGE_STATUS),
]


@pytest.mark.parametrize("check", ALL_CHECKS)
def test_missing_caller_is_denied(check, lookup):
    decision = decide(None, check, lookup)
    assert not decision
    assert decision.reason == DenyReason.UNAUTHENTICATED
    assert lookup.calls == 0


@pytest.mark.parametrize(
    "check",
    ALL_CHECKS
    + [
        AccessCheck.ownership(MISSING_VISIT),
        AccessCheck.derived_access(SITE_WITHOUT_VISIT),
    ],
)
def test_admin_bypasses_every_check(check, lookup):
    assert decide(ADMIN, check, lookup)
    assert lookup.calls == 0


class TestOwnership:
    def test_owner_allowed(self, lookup):
        assert decide(ENGINEER, AccessCheck.ownership(OWN_VISIT), lookup)

    def test_non_owner_denied(self, lookup):
        decision = decide(OTHER_ENGINEER, AccessCheck.ownership(OWN_VISIT), lookup)
        assert decision.allowed is False
        assert decision.reason == DenyReason.NOT_OWNER

    def test_missing_visit_denied_as_not_found(self, lookup):
        decision = decide(ENGINEER, AccessCheck.ownership(MISSING_VISIT), lookup)
        assert decision.reason == DenyReason.NOT_FOUND


class TestDerivedAccess:
    def test_visit_at_site_grants_access(self, lookup):
        assert decide(ENGINEER, AccessCheck.derived_access(SITE_WITH_VISIT), lookup)

    def test_no_visit_denied(self, lookup):
        decision = decide(OTHER_ENGINEER, AccessCheck.derived_access(SITE_WITH_VISIT), lookup)
        assert decision.reason == DenyReason.NO_VISIT_AT_SITE
        assert not decide(ENGINEER, AccessCheck.derived_access(SITE_WITHOUT_VISIT), lookup)


class TestManagement:
    def test_edit_follows_ownership(self, lookup):
        assert decide(ENGINEER, AccessCheck.management(OWN_VISIT, ManagementAction.EDIT), lookup)
        assert not decide(
            ENGINEER, AccessCheck.management(FOREIGN_VISIT, ManagementAction.EDIT), lookup
        )

    def test_change_status_is_admin_only(self, lookup):
        decision = decide(
            ENGINEER, AccessCheck.management(OWN_VISIT, ManagementAction.CHANGE_STATUS), lookup
        )
        assert decision.reason == DenyReason.ADMIN_ONLY


def test_access_check_constructors():
    assert AccessCheck.ownership(1).action is None
    assert AccessCheck.management(1, ManagementAction.EDIT).action is ManagementAction.EDIT
    assert ADMIN.is_admin and not ENGINEER.is_admin
