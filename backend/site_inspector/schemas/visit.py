"""Visit schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from site_inspector.models.visit import VisitStatus


class VisitSchema(Schema):
    id = fields.Integer(required=True)
    site_id = fields.Integer(required=True)
    user_id = fields.Integer(required=True)
    status = fields.String(required=True)
    priority = fields.String(required=True)
    type = fields.String(required=True)
    scheduled_date = fields.DateTime(allow_none=True)
    notes = fields.String(allow_none=True)
    rejection_reason = fields.String(allow_none=True)
    reviewed_at = fields.DateTime(allow_none=True)
    reviewed_by_id = fields.Integer(allow_none=True)


class VisitNotesSchema(Schema):
    """Input payload replacing the notes of a visit."""

    notes = fields.String(required=True, allow_none=True, validate=validate.Length(max=4000))


class VisitStatusSchema(Schema):
    """Input payload for an administrative status change."""

    status = fields.String(
        required=True, validate=validate.OneOf([s.value for s in VisitStatus])
    )
    rejection_reason = fields.String(load_default=None, validate=validate.Length(max=1000))
    notes = fields.String(load_default=None, validate=validate.Length(max=4000))
