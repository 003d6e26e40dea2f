# site_inspector/services/visits/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from site_inspector.models.base import ensure_utc
from site_inspector.models.visit import Visit


@dataclass(frozen=True, slots=True)
class ChangeStatusIn:
    """
    Input DTO for an administrative status change.

    :param status: Target status value (e.g. ``"Accepted"``).
    :type status: str
    :param rejection_reason: Required when ``status`` is ``"Rejected"``.
    :type rejection_reason: str | None
    :param notes: Optional reviewer note replacing the current notes.
    :type notes: str | None
    """

    status: str
    rejection_reason: str | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class VisitOut:
    id: int
    site_id: int
    user_id: int
    status: str
    priority: str
    type: str
    scheduled_date: datetime | None
    notes: str | None
    rejection_reason: str | None
    reviewed_at: datetime | None
    reviewed_by_id: int | None

    @classmethod
    def from_model(cls, visit: Visit) -> VisitOut:
        return cls(
            id=visit.id,
            site_id=visit.site_id,
            user_id=visit.user_id,
            status=visit.status.value,
            priority=visit.priority.value,
            type=visit.type.value,
            scheduled_date=ensure_utc(visit.scheduled_date),
            notes=visit.notes,
            rejection_reason=visit.rejection_reason,
            reviewed_at=ensure_utc(visit.reviewed_at),
            reviewed_by_id=visit.reviewed_by_id,
        )
