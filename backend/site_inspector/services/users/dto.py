# site_inspector/services/users/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from site_inspector.models.base import ensure_utc
from site_inspector.models.user import User


@dataclass(frozen=True, slots=True)
class UpdateUserStatusIn:
    """
    Input DTO for an administrative status change. ``None`` leaves a field as is.

    :param is_active: Activate or deactivate the account.
    :type is_active: bool | None
    :param is_locked: Apply or lift an administrative lock.
    :type is_locked: bool | None
    :param lockout_end: Instant the lock lapses; must lie in the future.
    :type lockout_end: datetime | None
    """

    is_active: bool | None = None
    is_locked: bool | None = None
    lockout_end: datetime | None = None


@dataclass(frozen=True, slots=True)
class UserStatusOut:
    id: int
    is_active: bool
    is_locked: bool
    lockout_end: datetime | None
    login_attempts: int
    last_login_at: datetime | None
    last_login_ip: str | None

    @classmethod
    def from_model(cls, user: User) -> UserStatusOut:
        return cls(
            id=user.id,
            is_active=user.is_active,
            is_locked=user.is_locked,
            lockout_end=ensure_utc(user.lockout_end),
            login_attempts=user.login_attempts,
            last_login_at=ensure_utc(user.last_login_at),
            last_login_ip=user.last_login_ip,
        )
