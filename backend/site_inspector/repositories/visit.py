"""Visit repository with the narrow accessors used by authorization."""

from __future__ import annotations

from sqlalchemy import select

from site_inspector.models.visit import Visit
from site_inspector.repositories.base import BaseRepository


class VisitRepository(BaseRepository[Visit]):
    """Persistence-only repository for :class:`Visit`."""

    model = Visit

    def get_owner_id(self, visit_id: int) -> int | None:
        """Return the owning user id of ``visit_id`` or ``None`` if the visit is absent.

        :param visit_id: Visit primary key.
        :type visit_id: int
        :rtype: int | None
        """
        stmt = select(Visit.user_id).where(Visit.id == visit_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def user_has_visit_at_site(self, user_id: int, site_id: int) -> bool:
        """Return ``True`` if ``user_id`` recorded at least one visit at ``site_id``."""
        stmt = (
            select(Visit.id)
            .where(Visit.user_id == user_id, Visit.site_id == site_id)
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None
