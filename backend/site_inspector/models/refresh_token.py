"""Persisted refresh-token records (hash only, never the raw secret)."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from site_inspector.core.extensions import db

from .base import ReprMixin, ensure_utc, utcnow


class RevocationReason(str, Enum):
    """Actor recorded in ``revoked_by`` when a refresh token is revoked."""

    ROTATED = "refresh"
    LOGOUT = "logout"
    LOGOUT_ALL = "logout_all"
    PASSWORD_CHANGE = "password_change"
    PASSWORD_RESET = "password_reset"
    ADMIN = "admin"


def _new_token_id() -> str:
    return str(uuid4())


class RefreshToken(ReprMixin, db.Model):
    """
    One issued refresh credential.

    Rows are created at login, registration and rotation, and afterwards only
    the revocation columns change. Expiry is absolute and never extended.
    A token is usable iff ``not is_revoked and expires_at > now``.

    Fields
    ------
    id : str
        Opaque identifier (uuid4).
    user_id : int
        Owning user. Rows are cascade-deleted with the user.
    token_hash : str
        SHA-256 hex digest of the raw secret.
    expires_at : datetime
        Absolute expiry (UTC).
    is_revoked, revoked_at, revoked_by : bool, datetime | None, str | None
        Revocation state and attribution (see :class:`RevocationReason`).
    ip_address, user_agent : str | None
        Issuing client, audit only.
    created_at : datetime
        Issuance instant.
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_token_id)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token_hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_revoked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    revoked_by: Mapped[str | None] = mapped_column(String(50), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_refresh_tokens_user_id", "user_id"),
        Index("ix_refresh_tokens_expires_at", "expires_at"),
    )

    def is_active_at(self, now: datetime) -> bool:
        """
        Return ``True`` when the token may still be exchanged at ``now``.

        ``now == expires_at`` counts as expired.

        :param now: Reference instant (UTC).
        :type now: datetime
        """
        expires_at = ensure_utc(self.expires_at)
        return not self.is_revoked and expires_at is not None and expires_at > now
