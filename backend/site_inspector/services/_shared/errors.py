"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or HTTP.
Services raise them internally; :meth:`BaseService.run` converts every
:class:`ServiceError` into a failed
:class:`~site_inspector.services._shared.results.ServiceResult` carrying the
matching :class:`ErrorKind`. :class:`StoreUnavailableError` is the exception to
that rule: it propagates to the top-level Flask handler.
"""

from __future__ import annotations

from enum import Enum

from sqlalchemy.exc import IntegrityError


class ErrorKind(str, Enum):
    """Stable failure categories exposed to the HTTP layer."""

    VALIDATION = "validation_error"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_CURRENT_PASSWORD = "invalid_current_password"
    INVALID_TOKEN = "invalid_token"
    AUTHORIZATION_DENIED = "authorization_denied"
    NOT_FOUND = "not_found"
    STORE_UNAVAILABLE = "store_unavailable"


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports ``table.column``,
    so ``uq_users_email`` also matches ``users.email``.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_email').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    prefix, _, rest = constraint_name.lower().partition("_")
    table, _, column = rest.partition("_")
    return prefix == "uq" and f"{table}.{column}" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Attributes
    ----------
    kind : ErrorKind
        Category used by the HTTP layer to pick a status code.
    message : str
        Client-safe summary.
    errors : list[str]
        Detail strings; defaults to ``[message]``.
    """

    kind: ErrorKind = ErrorKind.VALIDATION
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None, *, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = list(errors) if errors else [self.message]
        super().__init__(self.message)


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Malformed or conflicting input; the caller can fix it and retry."""

    kind = ErrorKind.VALIDATION
    default_message = "Validation failed"


class InvalidCredentialsError(ServiceError):
    """Login failure. The message is generic so accounts cannot be enumerated."""

    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid email or password"


class InvalidCurrentPasswordError(ServiceError):
    kind = ErrorKind.INVALID_CURRENT_PASSWORD
    default_message = "Current password is incorrect"


class InvalidTokenError(ServiceError):
    """Refresh token unknown, revoked or expired; the client must sign in again."""

    kind = ErrorKind.INVALID_TOKEN
    default_message = "Invalid or expired refresh token"


class AuthorizationError(ServiceError):
    """Raised by services after a deny decision."""

    kind = ErrorKind.AUTHORIZATION_DENIED
    default_message = "Access denied"


class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Visit").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, key: str | int) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found")


class StoreUnavailableError(ServiceError):
    """
    The relational store could not be reached or failed mid-operation.

    Not converted into a result: it propagates so the top-level handler logs
    the cause and answers 500 with a generic message.
    """

    kind = ErrorKind.STORE_UNAVAILABLE
    default_message = "An unexpected error occurred"
