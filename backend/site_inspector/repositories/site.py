"""Site repository."""

from __future__ import annotations

from site_inspector.models.site import Site
from site_inspector.repositories.base import BaseRepository


class SiteRepository(BaseRepository[Site]):
    """Persistence-only repository for :class:`Site`."""

    model = Site
