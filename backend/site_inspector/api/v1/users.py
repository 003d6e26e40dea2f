"""Administrative account endpoints."""

from __future__ import annotations

from flask import Blueprint

from site_inspector.api.deps import (
    current_caller,
    load_json,
    require_roles,
    result_response,
    timing,
    user_admin_service,
)
from site_inspector.schemas import UserStatusSchema, UserStatusUpdateSchema
from site_inspector.services import UpdateUserStatusIn
from site_inspector.services._shared.policies.common import ADMIN_ONLY

bp = Blueprint("users", __name__)

status_schema = UserStatusSchema()
status_update_schema = UserStatusUpdateSchema()


@bp.get("/<int:user_id>/status")
@require_roles(ADMIN_ONLY)
@timing
def get_user_status(user_id: int):
    result = user_admin_service().get_user_status(current_caller(), user_id)
    return result_response(result, schema=status_schema)


@bp.put("/<int:user_id>/status")
@require_roles(ADMIN_ONLY)
@timing
def update_user_status(user_id: int):
    """Activate, deactivate, lock or unlock an account. Administrators only."""

    data = load_json(status_update_schema)
    result = user_admin_service().update_user_status(
        current_caller(), user_id, UpdateUserStatusIn(**data)
    )
    return result_response(result, schema=status_schema)
