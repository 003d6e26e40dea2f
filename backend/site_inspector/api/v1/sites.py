"""Site endpoints."""

from __future__ import annotations

from flask import Blueprint

from site_inspector.api.deps import current_caller, require_auth, result_response, timing
from site_inspector.schemas import SiteSchema
from site_inspector.services import SiteService

bp = Blueprint("sites", __name__)

site_schema = SiteSchema()


@bp.get("/<int:site_id>")
@require_auth
@timing
def get_site(site_id: int):
    """Return a site to admins and to engineers with at least one visit there."""

    return result_response(SiteService().get_site(current_caller(), site_id), schema=site_schema)
