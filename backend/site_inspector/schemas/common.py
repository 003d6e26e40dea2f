"""Common Marshmallow schemas shared across resources."""

from __future__ import annotations

from marshmallow import Schema, fields


class EnvelopeSchema(Schema):
    """Shape of every API response body."""

    success = fields.Boolean(required=True)
    message = fields.String(required=True)
    data = fields.Raw(allow_none=True)
    errors = fields.List(fields.String(), required=True)
    request_id = fields.String()
