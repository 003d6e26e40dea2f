"""Centralized JSON error handling rendering the API result envelope."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from site_inspector.core.logger import ensure_request_id

log = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def flatten_messages(messages: Any, prefix: str = "") -> list[str]:
    """
    Flatten marshmallow's nested error mapping into ``"field: message"`` strings.

    :param messages: ``ValidationError.messages`` (dict, list or str).
    :param prefix: Dotted path of the enclosing field.
    :returns: Flat list of human-readable messages.
    :rtype: list[str]
    """
    if isinstance(messages, dict):
        flat: list[str] = []
        for key, value in messages.items():
            path = f"{prefix}.{key}" if prefix else str(key)
            flat.extend(flatten_messages(value, path))
        return flat
    if isinstance(messages, list | tuple):
        flat = []
        for item in messages:
            flat.extend(flatten_messages(item, prefix))
        return flat
    return [f"{prefix}: {messages}" if prefix else str(messages)]


def as_envelope(
    *,
    message: str,
    errors: list[str] | None = None,
    data: Any = None,
) -> dict[str, Any]:
    """
    Build a failure envelope with the correlation id attached.

    :param message: Client-safe summary.
    :param errors: Optional list of error strings.
    :param data: Optional payload (normally ``None`` for failures).
    :returns: Envelope dictionary.
    :rtype: dict
    """
    return {
        "success": False,
        "message": message,
        "data": data,
        "errors": list(errors or [message]),
        "request_id": ensure_request_id(),
    }


def envelope_response(payload: dict[str, Any], status: int) -> tuple[Response, int]:
    """Return a JSON response tuple for ``payload`` with ``status``."""
    return jsonify(payload), int(status)


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    errors : list[str] | None, optional
        Detail strings added to the envelope ``errors`` list.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.errors = errors or [message]

    def to_envelope(self) -> dict[str, Any]:
        """Serialize error metadata into the failure envelope."""
        return as_envelope(message=self.message, errors=self.errors)


class BadRequest(APIError):
    """400 for malformed input outside schema validation."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST)


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    """403 when authorization denies access."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message, status_code=HTTPStatus.FORBIDDEN)


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND)


def _register_jwt_loaders() -> None:
    """Render flask-jwt-extended failures with the shared envelope."""
    from site_inspector.core.extensions import jwt

    def _unauthorized(reason: str):
        log.info("jwt.rejected", extra={"event": "jwt.rejected", "reason": reason})
        return envelope_response(
            as_envelope(message="Unauthorized", errors=[reason]), HTTPStatus.UNAUTHORIZED
        )

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _unauthorized(reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return _unauthorized(reason)

    @jwt.expired_token_loader
    def _expired_token(_header: dict[str, Any], _payload: dict[str, Any]):
        return _unauthorized("Token has expired")

    @jwt.needs_fresh_token_loader
    def _needs_fresh(_header: dict[str, Any], _payload: dict[str, Any]):
        return _unauthorized("Fresh token required")


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - Every handled error renders ``{success, message, data, errors, request_id}``.
    - 5xx responses log ``exc_info`` but never leak internal details to clients.
    - Expected 4xx outcomes log as warnings without tracebacks.
    """
    from site_inspector.services._shared.errors import StoreUnavailableError

    _register_jwt_loaders()

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        payload = err.to_envelope()
        level = log.error if err.status_code >= 500 else log.warning
        level(
            "APIError: status=%s msg=%s request_id=%s",
            err.status_code,
            err.message,
            payload.get("request_id"),
        )
        return envelope_response(payload, err.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        elif status == HTTPStatus.TOO_MANY_REQUESTS:
            message = "Too many requests. Please try again later."
        else:
            message = HTTPStatus(status).phrase
        detail = (err.description or message).strip()
        payload = as_envelope(message=message, errors=[detail])
        level = log.error if status >= 500 else log.warning
        level(
            "HTTPException: status=%s detail=%s request_id=%s",
            status,
            detail,
            payload.get("request_id"),
        )
        response, _ = envelope_response(payload, status)
        # Keep Retry-After and similar headers produced by the exception
        for header, value in err.get_headers():
            if header.lower() != "content-type":
                response.headers[header] = value
        return response, status

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        payload = as_envelope(
            message="Validation failed",
            errors=flatten_messages(err.messages),
        )
        log.warning("ValidationError: request_id=%s", payload.get("request_id"))
        return envelope_response(payload, HTTPStatus.BAD_REQUEST)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        payload = as_envelope(message="Resource conflict")
        log.error("IntegrityError: request_id=%s", payload.get("request_id"), exc_info=True)
        return envelope_response(payload, HTTPStatus.CONFLICT)

    @app.errorhandler(StoreUnavailableError)
    def handle_store_unavailable(err: StoreUnavailableError):
        payload = as_envelope(message=GENERIC_ERROR_MESSAGE)
        log.error(
            "StoreUnavailable: request_id=%s",
            payload.get("request_id"),
            exc_info=err.__cause__ or err,
        )
        return envelope_response(payload, HTTPStatus.INTERNAL_SERVER_ERROR)

    @app.errorhandler(OperationalError)
    @app.errorhandler(DBAPIError)
    def handle_operational_error(err: DBAPIError):
        payload = as_envelope(message=GENERIC_ERROR_MESSAGE)
        log.error("OperationalError: request_id=%s", payload.get("request_id"), exc_info=True)
        return envelope_response(payload, HTTPStatus.INTERNAL_SERVER_ERROR)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        payload = as_envelope(message=GENERIC_ERROR_MESSAGE)
        log.error("Unhandled exception: request_id=%s", payload.get("request_id"), exc_info=True)
        return envelope_response(payload, HTTPStatus.INTERNAL_SERVER_ERROR)


__all__ = [
    "APIError",
    "BadRequest",
    "Forbidden",
    "NotFound",
    "Unauthorized",
    "as_envelope",
    "flatten_messages",
    "init_app",
]
