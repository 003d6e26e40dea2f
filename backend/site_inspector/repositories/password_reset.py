"""Password reset token repository."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import select

from site_inspector.models.password_reset import PasswordResetToken
from site_inspector.repositories.base import BaseRepository


class PasswordResetTokenRepository(BaseRepository[PasswordResetToken]):
    """Persistence-only repository for :class:`PasswordResetToken`."""

    model = PasswordResetToken

    def get_active(
        self, *, user_id: int, token_hash: str, now: datetime
    ) -> PasswordResetToken | None:
        stmt = select(PasswordResetToken).where(
            PasswordResetToken.user_id == user_id,
            PasswordResetToken.token_hash == token_hash,
            PasswordResetToken.used_at.is_(None),
            PasswordResetToken.expires_at > now,
        )
        return cast(PasswordResetToken | None, self.session.execute(stmt).scalars().first())

    def consume(self, token_id: int, *, now: datetime) -> bool:
        """Mark the token used if nobody redeemed it first; ``True`` on success."""
        affected = self._conditional_update(
            [
                PasswordResetToken.id == token_id,
                PasswordResetToken.used_at.is_(None),
                PasswordResetToken.expires_at > now,
            ],
            {"used_at": now},
        )
        return affected == 1

    def invalidate_for_user(self, user_id: int, *, now: datetime) -> int:
        """Burn every outstanding reset token of ``user_id``."""
        return self._conditional_update(
            [PasswordResetToken.user_id == user_id, PasswordResetToken.used_at.is_(None)],
            {"used_at": now},
        )

    def delete_expired(self, *, now: datetime) -> int:
        return self._bulk_delete([PasswordResetToken.expires_at < now])
