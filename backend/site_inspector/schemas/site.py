"""Site schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class SiteSchema(Schema):
    id = fields.Integer(required=True)
    name = fields.String(required=True)
    code = fields.String(required=True)
    location = fields.String(allow_none=True)
    address = fields.String(allow_none=True)
    status = fields.String(required=True)
