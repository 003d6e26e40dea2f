"""Administrative user-status schemas."""

from __future__ import annotations

from datetime import timezone
from typing import Any

from marshmallow import Schema, ValidationError, fields, validates_schema


class UserStatusSchema(Schema):
    id = fields.Integer(required=True)
    is_active = fields.Boolean(required=True)
    is_locked = fields.Boolean(required=True)
    lockout_end = fields.DateTime(allow_none=True)
    login_attempts = fields.Integer(required=True)
    last_login_at = fields.DateTime(allow_none=True)
    last_login_ip = fields.String(allow_none=True)


class UserStatusUpdateSchema(Schema):
    """Input payload for an administrative status change.

    Naive ``lockout_end`` values are read as UTC.
    """

    is_active = fields.Boolean(load_default=None, allow_none=True)
    is_locked = fields.Boolean(load_default=None, allow_none=True)
    lockout_end = fields.AwareDateTime(
        load_default=None, allow_none=True, default_timezone=timezone.utc
    )

    @validates_schema
    def _any_field(self, data: dict[str, Any], **_: Any) -> None:
        if all(data.get(key) is None for key in ("is_active", "is_locked", "lockout_end")):
            raise ValidationError("At least one status field is required")
