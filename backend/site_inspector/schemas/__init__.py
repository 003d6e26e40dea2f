"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AuthSchema,
    ChangePasswordSchema,
    ForgotPasswordSchema,
    LoginSchema,
    LogoutSchema,
    RefreshSchema,
    RegisterSchema,
    ResetPasswordSchema,
    SessionSchema,
    TokenPairSchema,
    UserSchema,
)
from .common import EnvelopeSchema
from .site import SiteSchema
from .user import UserStatusSchema, UserStatusUpdateSchema
from .visit import VisitNotesSchema, VisitSchema, VisitStatusSchema

__all__ = [
    "AuthSchema",
    "ChangePasswordSchema",
    "EnvelopeSchema",
    "ForgotPasswordSchema",
    "LoginSchema",
    "LogoutSchema",
    "RefreshSchema",
    "RegisterSchema",
    "ResetPasswordSchema",
    "SessionSchema",
    "SiteSchema",
    "TokenPairSchema",
    "UserSchema",
    "UserStatusSchema",
    "UserStatusUpdateSchema",
    "VisitNotesSchema",
    "VisitSchema",
    "VisitStatusSchema",
]
