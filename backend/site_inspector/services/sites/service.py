from __future__ import annotations

from site_inspector.services._shared.base import BaseService, ServiceContext
from site_inspector.services._shared.errors import NotFoundError
from site_inspector.services._shared.results import ServiceResult
from site_inspector.services.authorization import AccessCheck, AuthorizationService, Caller
from site_inspector.services.sites.dto import SiteOut


class SiteService(BaseService):
    """Site reads gated by derived access (a visit at the site)."""

    def __init__(
        self,
        *,
        authorization: AuthorizationService | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self.authz = authorization or AuthorizationService(ctx=ctx)

    def get_site(self, caller: Caller | None, site_id: int) -> ServiceResult[SiteOut]:
        def _get() -> SiteOut:
            with self.ro_uow() as uow:
                self.authz.require(
                    caller, AccessCheck.derived_access(site_id), entity="Site", uow=uow
                )
                site = uow.sites.get(site_id)
                if site is None:
                    raise NotFoundError("Site", site_id)
                return SiteOut.from_model(site)

        return self.run(_get, message="Site retrieved successfully")
