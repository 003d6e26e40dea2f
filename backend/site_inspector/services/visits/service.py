# site_inspector/services/visits/service.py
"""
VisitService
============

Read and manage single inspection visits on behalf of an explicit caller.
Every operation asks :class:`AuthorizationService` first; engineers reach only
their own visits, administrators reach all of them and alone may change the
review status.
"""

from __future__ import annotations

import logging

from site_inspector.models.visit import CLOSED_STATUSES, VisitStatus
from site_inspector.services._shared.base import BaseService, ServiceContext
from site_inspector.services._shared.errors import NotFoundError, ValidationError
from site_inspector.services._shared.results import ServiceResult
from site_inspector.services.authorization import (
    AccessCheck,
    AuthorizationService,
    Caller,
    ManagementAction,
)
from site_inspector.services.visits.dto import ChangeStatusIn, VisitOut

log = logging.getLogger(__name__)

REVIEW_STATUSES = frozenset({VisitStatus.ACCEPTED, VisitStatus.REJECTED})


class VisitService(BaseService):
    def __init__(
        self,
        *,
        authorization: AuthorizationService | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.authz = authorization or AuthorizationService(ctx=ctx)

    def get_visit(self, caller: Caller | None, visit_id: int) -> ServiceResult[VisitOut]:
        """
        Return one visit if ``caller`` owns it or is an administrator.

        :returns: ``ok`` with the visit; ``fail`` with ``not_found`` or
            ``authorization_denied``.
        """

        def _get() -> VisitOut:
            with self.ro_uow() as uow:
                self.authz.require(caller, AccessCheck.ownership(visit_id), entity="Visit", uow=uow)
                visit = uow.visits.get(visit_id)
                if visit is None:
                    raise NotFoundError("Visit", visit_id)
                return VisitOut.from_model(visit)

        return self.run(_get, message="Visit retrieved successfully")

    def update_notes(
        self, caller: Caller | None, visit_id: int, notes: str | None
    ) -> ServiceResult[VisitOut]:
        """
        Replace the notes of a visit (management ``EDIT``).

        Notes are frozen once the visit is accepted, rejected or cancelled.
        """

        def _update() -> VisitOut:
            with self.rw_uow() as uow:
                self.authz.require(
                    caller,
                    AccessCheck.management(visit_id, ManagementAction.EDIT),
                    entity="Visit",
                    uow=uow,
                )
                visit = uow.visits.get_for_update(visit_id)
                if visit is None:
                    raise NotFoundError("Visit", visit_id)
                if visit.status in CLOSED_STATUSES:
                    raise ValidationError(
                        f"Notes cannot be edited when the visit is {visit.status.value}"
                    )
                visit.notes = notes
                uow.visits.flush()
                return VisitOut.from_model(visit)

        return self.run(_update, message="Visit updated successfully")

    def change_status(
        self, caller: Caller | None, visit_id: int, dto: ChangeStatusIn
    ) -> ServiceResult[VisitOut]:
        """
        Move a visit to a new status (management ``CHANGE_STATUS``, admin only).

        Accepting or rejecting records the reviewer and the review instant;
        rejecting requires a reason.
        """

        def _change() -> VisitOut:
            try:
                status = VisitStatus(dto.status)
            except ValueError as exc:
                allowed = ", ".join(s.value for s in VisitStatus)
                raise ValidationError(
                    "Invalid status", errors=[f"Status must be one of: {allowed}"]
                ) from exc
            reason = (dto.rejection_reason or "").strip()
            if status is VisitStatus.REJECTED and not reason:
                raise ValidationError("Rejection reason is required when rejecting a visit")

            with self.rw_uow() as uow:
                self.authz.require(
                    caller,
                    AccessCheck.management(visit_id, ManagementAction.CHANGE_STATUS),
                    entity="Visit",
                    uow=uow,
                )
                visit = uow.visits.get_for_update(visit_id)
                if visit is None:
                    raise NotFoundError("Visit", visit_id)

                visit.status = status
                visit.rejection_reason = reason if status is VisitStatus.REJECTED else None
                if dto.notes:
                    visit.notes = dto.notes
                if status in REVIEW_STATUSES and caller is not None:
                    visit.reviewed_at = self.now_utc()
                    visit.reviewed_by_id = caller.user_id
                uow.visits.flush()
                out = VisitOut.from_model(visit)

            log.info(
                "Visit status changed",
                extra={"event": "visit.status_changed", "user_id": caller.user_id if caller else None},
            )
            return out

        return self.run(_change, message="Visit status updated successfully")
