"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import Schema, ValidationError, fields, validate, validates_schema

from site_inspector.models.user import UserRole

# ------------------------------- Inputs --------------------------------------


class RegisterSchema(Schema):
    """Input payload for account registration.

    Password strength is enforced by the service so every violation is
    reported at once.
    """

    email = fields.Email(required=True, validate=validate.Length(max=254))
    username = fields.String(required=True, validate=validate.Length(min=3, max=50))
    full_name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    password = fields.String(required=True, load_only=True)
    role = fields.String(
        load_default=None, validate=validate.OneOf([r.value for r in UserRole])
    )


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, load_only=True, validate=validate.Length(max=128))


class RefreshSchema(Schema):
    refresh_token = fields.String(required=True, validate=validate.Length(min=1, max=512))


class LogoutSchema(Schema):
    refresh_token = fields.String(load_default=None, validate=validate.Length(max=512))


class ChangePasswordSchema(Schema):
    """Input payload for changing the password of the signed-in user."""

    current_password = fields.String(required=True, load_only=True)
    new_password = fields.String(required=True, load_only=True)
    confirm_password = fields.String(load_default=None, load_only=True)

    @validates_schema
    def _passwords_match(self, data: dict[str, Any], **_: Any) -> None:
        confirm = data.get("confirm_password")
        if confirm is not None and confirm != data.get("new_password"):
            raise ValidationError("Passwords do not match", field_name="confirm_password")


class ForgotPasswordSchema(Schema):
    email = fields.Email(required=True, validate=validate.Length(max=254))


class ResetPasswordSchema(Schema):
    email = fields.Email(required=True, validate=validate.Length(max=254))
    token = fields.String(required=True, validate=validate.Length(min=1, max=512))
    new_password = fields.String(required=True, load_only=True)


# ------------------------------- Outputs -------------------------------------


class UserSchema(Schema):
    """Public representation of a user."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    username = fields.String(required=True)
    full_name = fields.String(required=True)
    role = fields.String(required=True)
    is_active = fields.Boolean(required=True)
    last_login_at = fields.DateTime(allow_none=True)


class TokenPairSchema(Schema):
    """Response payload containing an access token and a refresh secret."""

    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)
    token_type = fields.String(dump_default="Bearer")
    access_expires_at = fields.DateTime(required=True)
    refresh_expires_at = fields.DateTime(required=True)


class AuthSchema(Schema):
    """Login/registration response: token pair plus the user."""

    tokens = fields.Nested(TokenPairSchema, required=True)
    user = fields.Nested(UserSchema, required=True)


class SessionSchema(Schema):
    """One active refresh session. The token hash is never exposed."""

    id = fields.String(required=True)
    created_at = fields.DateTime(required=True)
    expires_at = fields.DateTime(required=True)
    ip_address = fields.String(allow_none=True)
    user_agent = fields.String(allow_none=True)
