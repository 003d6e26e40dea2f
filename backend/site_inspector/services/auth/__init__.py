from .dto import AuthOut, ChangePasswordIn, LoginIn, RegisterIn, ResetPasswordIn, UserPublicOut
from .passwords import password_policy_errors
from .service import FORGOT_PASSWORD_MESSAGE, AuthService

__all__ = [
    "AuthService",
    "AuthOut",
    "ChangePasswordIn",
    "LoginIn",
    "RegisterIn",
    "ResetPasswordIn",
    "UserPublicOut",
    "password_policy_errors",
    "FORGOT_PASSWORD_MESSAGE",
]
