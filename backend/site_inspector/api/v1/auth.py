"""Authentication endpoints backed by :class:`AuthService`."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app

from site_inspector.api.deps import (
    auth_service,
    client_info,
    current_caller,
    current_user_id,
    load_json,
    require_auth,
    result_response,
    timing,
)
from site_inspector.core.extensions import limiter
from site_inspector.schemas import (
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
from site_inspector.services import ChangePasswordIn, LoginIn, RegisterIn, ResetPasswordIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshSchema()
logout_schema = LogoutSchema()
change_password_schema = ChangePasswordSchema()
forgot_password_schema = ForgotPasswordSchema()
reset_password_schema = ResetPasswordSchema()
auth_schema = AuthSchema()
token_schema = TokenPairSchema()
user_schema = UserSchema()
sessions_schema = SessionSchema(many=True)


def _auth_rate_limit() -> str:
    return str(current_app.config.get("AUTH_RATE_LIMIT", "5 per minute"))


@bp.post("/register")
@limiter.limit(_auth_rate_limit)
@timing
def register():
    """Create an account and return a token pair with the new user.

    Requesting the ``Admin`` role requires an administrator access token.
    """

    data = load_json(register_schema)
    result = auth_service().register(RegisterIn(**data), client_info(), caller=current_caller())
    return result_response(result, schema=auth_schema, success_status=HTTPStatus.CREATED)


@bp.post("/login")
@limiter.limit(_auth_rate_limit)
@timing
def login():
    """Authenticate credentials and issue a token pair."""

    data = load_json(login_schema)
    result = auth_service().login(LoginIn(**data), client_info())
    return result_response(result, schema=auth_schema)


@bp.post("/refresh")
@limiter.limit(_auth_rate_limit)
@timing
def refresh():
    """Exchange a refresh secret for a new pair; the old secret stops working."""

    data = load_json(refresh_schema)
    result = auth_service().refresh(data["refresh_token"], client_info())
    return result_response(result, schema=token_schema)


@bp.post("/logout")
@limiter.limit(_auth_rate_limit)
@timing
def logout():
    data = load_json(logout_schema)
    return result_response(auth_service().logout(data.get("refresh_token")))


@bp.post("/logout-all")
@require_auth
@timing
def logout_all():
    """Revoke every refresh token of the signed-in user."""

    return result_response(auth_service().logout_all(current_user_id()))


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = load_json(change_password_schema)
    dto = ChangePasswordIn(
        current_password=data["current_password"], new_password=data["new_password"]
    )
    return result_response(auth_service().change_password(current_user_id(), dto))


@bp.post("/forgot-password")
@limiter.limit(_auth_rate_limit)
@timing
def forgot_password():
    """Always answers success so account existence is not disclosed."""

    data = load_json(forgot_password_schema)
    return result_response(auth_service().forgot_password(data["email"]))


@bp.post("/reset-password")
@limiter.limit(_auth_rate_limit)
@timing
def reset_password():
    data = load_json(reset_password_schema)
    return result_response(auth_service().reset_password(ResetPasswordIn(**data)))


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user profile."""

    return result_response(auth_service().get_current_user(current_user_id()), schema=user_schema)


@bp.get("/sessions")
@require_auth
@timing
def sessions():
    """List the active refresh sessions of the signed-in user."""

    return result_response(auth_service().list_sessions(current_user_id()), schema=sessions_schema)
