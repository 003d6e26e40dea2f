"""Shared API helpers: authentication guards, caller extraction and result rendering."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterable
from datetime import timedelta
from http import HTTPStatus
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from marshmallow import Schema

from site_inspector.core.errors import Forbidden, Unauthorized
from site_inspector.core.logger import ensure_request_id
from site_inspector.models.user import UserRole
from site_inspector.services import (
    AuthService,
    Caller,
    ClientInfo,
    ErrorKind,
    ServiceResult,
    TokenConfig,
    TokenService,
    UserAdminService,
)
from site_inspector.services._shared.policies.common import has_any_role

F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.INVALID_CURRENT_PASSWORD: HTTPStatus.BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIALS: HTTPStatus.UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: HTTPStatus.UNAUTHORIZED,
    ErrorKind.AUTHORIZATION_DENIED: HTTPStatus.FORBIDDEN,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.STORE_UNAVAILABLE: HTTPStatus.INTERNAL_SERVER_ERROR,
}

USER_AGENT_MAX_LENGTH = 500


# ------------------------------ Responses ------------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def result_response(
    result: ServiceResult[Any],
    *,
    schema: Schema | None = None,
    success_status: int = HTTPStatus.OK,
) -> Response:
    """Render a :class:`ServiceResult` as the response envelope.

    Parameters
    ----------
    result:
        Outcome returned by a service.
    schema:
        Marshmallow schema dumping ``result.data`` on success. Without one the
        dataclass payload is converted as is.
    success_status:
        Status used when ``result.success`` is true.

    Failures take their status from :data:`STATUS_BY_KIND`.
    """

    body = result.to_dict()
    if result.success:
        if schema is not None and result.data is not None:
            body["data"] = schema.dump(result.data)
        return json_response(body, status=int(success_status))

    body["request_id"] = ensure_request_id()
    status = STATUS_BY_KIND.get(result.kind, HTTPStatus.BAD_REQUEST) if result.kind else 400
    return json_response(body, status=int(status))


def load_json(schema: Schema) -> dict[str, Any]:
    """Validate the JSON body with ``schema``; errors surface as a 400 envelope."""

    return schema.load(request.get_json(silent=True) or {})


# ------------------------------ Identity -------------------------------------


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def require_roles(*roles: UserRole | Iterable[UserRole]) -> Callable[[F], F]:
    """Ensure the verified JWT carries one of ``roles`` in its ``role`` claim."""

    allowed: set[UserRole] = set()
    for role in roles:
        if isinstance(role, UserRole):
            allowed.add(role)
        else:
            allowed.update(role)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            verify_jwt_in_request(optional=False)
            claims = get_jwt() or {}
            if not has_any_role(claims.get("role"), allowed):
                raise Forbidden("Insufficient role")
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_caller() -> Caller | None:
    """Build the :class:`Caller` from the verified access token.

    Returns ``None`` when no valid token is present or its claims cannot be
    mapped to a known user id and role, so authorization fails closed.
    """

    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if identity is None:
        return None
    try:
        user_id = int(identity)
        role = UserRole((get_jwt() or {}).get("role"))
    except (TypeError, ValueError):
        return None
    return Caller(user_id=user_id, role=role)


def current_user_id() -> int:
    """Return the authenticated user id; call only behind :func:`require_auth`."""

    caller = current_caller()
    if caller is None:
        raise Unauthorized("Invalid token identity")
    return caller.user_id


def client_info() -> ClientInfo:
    """Audit data of the current request (address after ProxyFix, user agent)."""

    user_agent = request.headers.get("User-Agent")
    return ClientInfo(
        ip_address=request.remote_addr,
        user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
    )


# ------------------------------ Services -------------------------------------


def token_service() -> TokenService:
    """Build a :class:`TokenService` configured from the current app."""

    from site_inspector.infra.jwt.flask_jwt_token_provider import JWTTokenProvider

    cfg = current_app.config
    return TokenService(
        token_provider=JWTTokenProvider(),
        token_cfg=TokenConfig(
            access_expires=timedelta(minutes=int(cfg["ACCESS_TOKEN_MINUTES"])),
            refresh_expires=timedelta(days=int(cfg["REFRESH_TOKEN_DAYS"])),
        ),
    )


def auth_service() -> AuthService:
    """Build an :class:`AuthService` wired to the app's reset notifier."""

    from site_inspector.infra.mail.logging_notifier import LoggingPasswordResetNotifier

    notifier = current_app.extensions.get("password_reset_notifier") or LoggingPasswordResetNotifier()
    return AuthService(
        token_service=token_service(),
        notifier=notifier,
        reset_token_ttl=timedelta(minutes=int(current_app.config["PASSWORD_RESET_TOKEN_MINUTES"])),
    )


def user_admin_service() -> UserAdminService:
    """Build a :class:`UserAdminService` sharing the app token configuration."""

    return UserAdminService(token_service=token_service())


# ------------------------------ Telemetry ------------------------------------


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
