from __future__ import annotations

import logging

from site_inspector.services._shared.base import BaseService
from site_inspector.services._shared.errors import AuthorizationError, NotFoundError
from site_inspector.services.authorization.policy import (
    AccessCheck,
    Caller,
    Decision,
    DenyReason,
    decide,
)
from site_inspector.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class RepositoryAccessLookup:
    """:class:`AccessLookup` backed by the visit repository of an open unit of work."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._visits = uow.visits

    def visit_owner_id(self, visit_id: int) -> int | None:
        return self._visits.get_owner_id(visit_id)

    def has_visit_at_site(self, user_id: int, site_id: int) -> bool:
        return self._visits.user_has_visit_at_site(user_id, site_id)


class AuthorizationService(BaseService):
    """Answer :class:`AccessCheck` questions against the current database state."""

    def authorize(
        self, caller: Caller | None, check: AccessCheck, *, uow: UnitOfWork | None = None
    ) -> Decision:
        """
        Evaluate ``check`` for ``caller``.

        :param caller: Explicit identity; ``None`` is denied.
        :param check: Question to answer.
        :param uow: Open unit of work to read through; a read-only one is
            opened when omitted.
        :returns: The decision. Denials are logged, never raised.
        """
        if uow is not None:
            decision = decide(caller, check, RepositoryAccessLookup(uow))
        else:
            with self.ro_uow() as ro:
                decision = decide(caller, check, RepositoryAccessLookup(ro))

        if not decision:
            log.info(
                "Access denied",
                extra={
                    "event": "authz.denied",
                    "user_id": caller.user_id if caller else None,
                    "reason": decision.reason,
                },
            )
        return decision

    def require(
        self,
        caller: Caller | None,
        check: AccessCheck,
        *,
        entity: str,
        uow: UnitOfWork | None = None,
    ) -> Decision:
        """
        Like :meth:`authorize` but raise on denial, for use inside services.

        :raises NotFoundError: When the decision was denied because the
            resource does not exist.
        :raises AuthorizationError: For every other denial.
        """
        decision = self.authorize(caller, check, uow=uow)
        if decision:
            return decision
        if decision.reason == DenyReason.NOT_FOUND:
            raise NotFoundError(entity, check.resource_id)
        raise AuthorizationError()
