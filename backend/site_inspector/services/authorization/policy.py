"""
Authorization decision model.

Three kinds of checks cover every resource rule of the system:

* ``OWNERSHIP``: the caller owns the visit.
* ``DERIVED_ACCESS``: the caller may see a site because they have at least one
  visit there.
* ``MANAGEMENT``: editing a visit follows ownership; changing its review
  status is reserved to administrators.

:func:`decide` is the only evaluator. It is pure: data it needs comes through
an :class:`AccessLookup`, and the caller identity is always passed in.
Administrators bypass every check without a lookup, and a missing caller is
denied before anything else is considered.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from site_inspector.models.user import UserRole
from site_inspector.services._shared.policies.common import ADMIN_ONLY, has_any_role, is_owner


class CheckKind(str, Enum):
    OWNERSHIP = "ownership"
    DERIVED_ACCESS = "derived_access"
    MANAGEMENT = "management"


class ManagementAction(str, Enum):
    EDIT = "edit"
    CHANGE_STATUS = "change_status"


class DenyReason:
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    NOT_OWNER = "not_owner"
    NO_VISIT_AT_SITE = "no_visit_at_site"
    ADMIN_ONLY = "admin_only"


@dataclass(frozen=True, slots=True)
class Caller:
    """
    Identity the decision is made for.

    :param user_id: Authenticated user id.
    :type user_id: int
    :param role: Role of that user.
    :type role: UserRole
    """

    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return has_any_role(self.role, ADMIN_ONLY)


@dataclass(frozen=True, slots=True)
class AccessCheck:
    """
    One authorization question.

    Build instances through the classmethods so ``action`` is only ever set
    for management checks.
    """

    kind: CheckKind
    resource_id: int
    action: ManagementAction | None = None

    @classmethod
    def ownership(cls, visit_id: int) -> AccessCheck:
        return cls(CheckKind.OWNERSHIP, visit_id)

    @classmethod
    def derived_access(cls, site_id: int) -> AccessCheck:
        return cls(CheckKind.DERIVED_ACCESS, site_id)

    @classmethod
    def management(cls, visit_id: int, action: ManagementAction) -> AccessCheck:
        return cls(CheckKind.MANAGEMENT, visit_id, action)


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of :func:`decide`. Truthy iff access is allowed."""

    allowed: bool
    reason: str

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls, reason: str) -> Decision:
        return cls(True, reason)

    @classmethod
    def deny(cls, reason: str) -> Decision:
        return cls(False, reason)


class AccessLookup(Protocol):
    """Read access to the facts a decision depends on."""

    def visit_owner_id(self, visit_id: int) -> int | None:
        """Return the owning user id, or ``None`` when the visit does not exist."""
        ...

    def has_visit_at_site(self, user_id: int, site_id: int) -> bool: ...


def decide(caller: Caller | None, check: AccessCheck, lookup: AccessLookup) -> Decision:
    """
    Evaluate ``check`` for ``caller``.

    :param caller: Authenticated identity, ``None`` when there is none.
    :param check: The question to answer.
    :param lookup: Source of ownership and visit facts.
    :returns: A :class:`Decision`; denial is a value, never an exception.
    """
    if caller is None:
        return Decision.deny(DenyReason.UNAUTHENTICATED)
    if caller.is_admin:
        return Decision.allow("admin")

    if check.kind is CheckKind.OWNERSHIP:
        return _owns_visit(caller, check.resource_id, lookup)

    if check.kind is CheckKind.DERIVED_ACCESS:
        if lookup.has_visit_at_site(caller.user_id, check.resource_id):
            return Decision.allow("visit_at_site")
        return Decision.deny(DenyReason.NO_VISIT_AT_SITE)

    if check.kind is CheckKind.MANAGEMENT:
        if check.action is ManagementAction.EDIT:
            return _owns_visit(caller, check.resource_id, lookup)
        return Decision.deny(DenyReason.ADMIN_ONLY)

    return Decision.deny(f"unsupported:{check.kind}")


def _owns_visit(caller: Caller, visit_id: int, lookup: AccessLookup) -> Decision:
    owner_id = lookup.visit_owner_id(visit_id)
    if owner_id is None:
        return Decision.deny(DenyReason.NOT_FOUND)
    if is_owner(actor_id=caller.user_id, owner_id=owner_id):
        return Decision.allow("owner")
    return Decision.deny(DenyReason.NOT_OWNER)
