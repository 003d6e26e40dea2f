"""Single-use password reset tokens stored as hashes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from site_inspector.core.extensions import db

from .base import PKMixin, ReprMixin, utcnow


class PasswordResetToken(PKMixin, ReprMixin, db.Model):
    """
    Reset credential dispatched by the forgot-password flow.

    Usable iff ``used_at is None and expires_at > now``. Consumption is a
    conditional update so a token can only ever be redeemed once.
    """

    __tablename__ = "password_reset_tokens"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    token_hash: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (Index("ix_password_reset_tokens_user_id", "user_id"),)
