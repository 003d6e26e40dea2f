"""User model: login identity and role for the inspection console."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import Boolean, DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates
from werkzeug.security import check_password_hash, generate_password_hash

from site_inspector.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin, ensure_utc, str_enum


class UserRole(str, Enum):
    """Roles recognised by the authorization layer."""

    ADMIN = "Admin"
    ENGINEER = "Engineer"


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity of an engineer or administrator.

    Users are never physically deleted; they are soft-disabled through
    ``is_active``. Lock flags and the failed-login counter are maintained here
    but the lockout policy that consumes them lives elsewhere.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    username : str
        Public handle. Unique per system.
    full_name : str
        Display name.
    role : UserRole
        ``Admin`` or ``Engineer``.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    is_active : bool
        ``False`` for deactivated accounts.
    is_locked, lockout_end : bool, datetime | None
        Administrative lock and its optional expiry.
    login_attempts : int
        Consecutive failed logins since the last success.
    last_login_at, last_login_ip : datetime | None, str | None
        Audit of the last successful login.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        str_enum(UserRole), nullable=False, default=UserRole.ENGINEER
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lockout_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    login_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_login_ip: Mapped[str | None] = mapped_column(String(45), nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_role", "role"),
        Index("ix_users_is_active", "is_active"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash or not raw:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- State helpers --------------------
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_locked_at(self, now: datetime) -> bool:
        """
        Return ``True`` while an administrative lock is in force.

        A lock without ``lockout_end`` is indefinite.

        :param now: Reference instant (UTC).
        :type now: datetime
        """
        if not self.is_locked:
            return False
        end = ensure_utc(self.lockout_end)
        return end is None or end > now

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :param key: Field name (``email``).
        :type key: str
        :param value: Email to normalize.
        :type value: str
        :returns: Normalized email (lowercased/trimmed).
        :rtype: str
        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip()
