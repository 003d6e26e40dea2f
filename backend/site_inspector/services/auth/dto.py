# site_inspector/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from site_inspector.models.user import User
from site_inspector.services.tokens.dto import TokenPairOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for self-registration.

    :param email: Login email (normalized by the model).
    :type email: str
    :param username: Public handle.
    :type username: str
    :param full_name: Display name.
    :type full_name: str
    :param password: Raw password; checked against the policy.
    :type password: str
    :param role: ``"Admin"`` or ``"Engineer"``; defaults to ``"Engineer"``.
    :type role: str | None
    """

    email: str
    username: str
    full_name: str
    password: str
    role: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class ChangePasswordIn:
    current_password: str
    new_password: str


@dataclass(frozen=True, slots=True)
class ResetPasswordIn:
    """
    Input DTO for redeeming a password-reset secret.

    :param email: Account email.
    :type email: str
    :param token: Raw reset secret delivered by the notifier.
    :type token: str
    :param new_password: Replacement password.
    :type new_password: str
    """

    email: str
    token: str
    new_password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public-safe representation of a user.

    :param id: User identifier.
    :type id: int
    :param email: Email address.
    :type email: str
    :param username: Username.
    :type username: str
    :param full_name: Display name.
    :type full_name: str
    :param role: Role value (``"Admin"`` / ``"Engineer"``).
    :type role: str
    :param is_active: Whether the account may sign in.
    :type is_active: bool
    :param last_login_at: Last successful login, if any.
    :type last_login_at: datetime | None
    """

    id: int
    email: str
    username: str
    full_name: str
    role: str
    is_active: bool
    last_login_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            full_name=user.full_name,
            role=user.role.value,
            is_active=user.is_active,
            last_login_at=user.last_login_at,
        )


@dataclass(frozen=True, slots=True)
class AuthOut:
    """Token pair plus the authenticated user, returned by login and register."""

    tokens: TokenPairOut
    user: UserPublicOut
