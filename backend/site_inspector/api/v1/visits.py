"""Visit endpoints; access is decided per request for the calling user."""

from __future__ import annotations

from flask import Blueprint

from site_inspector.api.deps import (
    current_caller,
    load_json,
    require_auth,
    require_roles,
    result_response,
    timing,
)
from site_inspector.schemas import VisitNotesSchema, VisitSchema, VisitStatusSchema
from site_inspector.services import ChangeStatusIn, VisitService
from site_inspector.services._shared.policies.common import ADMIN_ONLY

bp = Blueprint("visits", __name__)

visit_schema = VisitSchema()
notes_schema = VisitNotesSchema()
status_schema = VisitStatusSchema()


@bp.get("/<int:visit_id>")
@require_auth
@timing
def get_visit(visit_id: int):
    return result_response(VisitService().get_visit(current_caller(), visit_id), schema=visit_schema)


@bp.patch("/<int:visit_id>/notes")
@require_auth
@timing
def update_notes(visit_id: int):
    """Replace the notes of a visit the caller owns (or any visit, for admins)."""

    data = load_json(notes_schema)
    result = VisitService().update_notes(current_caller(), visit_id, data["notes"])
    return result_response(result, schema=visit_schema)


@bp.put("/<int:visit_id>/status")
@require_roles(ADMIN_ONLY)
@timing
def change_status(visit_id: int):
    """Review a visit. Administrators only."""

    data = load_json(status_schema)
    result = VisitService().change_status(current_caller(), visit_id, ChangeStatusIn(**data))
    return result_response(result, schema=visit_schema)
