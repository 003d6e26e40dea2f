"""Refresh-token store: hashed credentials with race-free revocation."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import select

from site_inspector.models.refresh_token import RefreshToken, RevocationReason
from site_inspector.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`.

    Every method takes the token *hash*; hashing raw secrets is the caller's job.
    Revocations are single conditional ``UPDATE`` statements keyed on the
    still-active predicate, so two concurrent revocations of the same row
    cannot both succeed.
    """

    model = RefreshToken

    # ---------------------------- Lookups ----------------------------

    def get_active_by_hash(self, token_hash: str, *, now: datetime) -> RefreshToken | None:
        """Return the row for ``token_hash`` only if it is unrevoked and ``expires_at > now``.

        :param token_hash: SHA-256 hex digest of the presented secret.
        :type token_hash: str
        :param now: Reference instant (UTC).
        :type now: datetime
        :returns: Active row or ``None``.
        :rtype: RefreshToken | None
        """
        stmt = select(RefreshToken).where(
            RefreshToken.token_hash == token_hash,
            RefreshToken.is_revoked.is_(False),
            RefreshToken.expires_at > now,
        )
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def list_active_for_user(self, user_id: int, *, now: datetime) -> list[RefreshToken]:
        """Return the user's active rows, newest first."""
        stmt = (
            select(RefreshToken)
            .where(
                RefreshToken.user_id == user_id,
                RefreshToken.is_revoked.is_(False),
                RefreshToken.expires_at > now,
            )
            .order_by(RefreshToken.created_at.desc(), RefreshToken.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    # ---------------------------- Revocation ----------------------------

    def revoke_if_active(
        self,
        token_hash: str,
        *,
        now: datetime,
        reason: RevocationReason,
        require_unexpired: bool = True,
    ) -> bool:
        """Atomically revoke the row for ``token_hash`` if it is still active.

        :param token_hash: SHA-256 hex digest.
        :param now: Revocation instant (UTC), also the expiry reference.
        :param reason: Actor written to ``revoked_by``.
        :param require_unexpired: When ``False`` an expired but unrevoked row is
            revoked too (logout of a stale token).
        :returns: ``True`` iff this call flipped the row.
        :rtype: bool
        """
        where = [RefreshToken.token_hash == token_hash, RefreshToken.is_revoked.is_(False)]
        if require_unexpired:
            where.append(RefreshToken.expires_at > now)
        affected = self._conditional_update(
            where,
            {"is_revoked": True, "revoked_at": now, "revoked_by": reason.value},
        )
        return affected == 1

    def revoke_all_for_user(
        self, user_id: int, *, now: datetime, reason: RevocationReason
    ) -> int:
        """Revoke every unrevoked row of ``user_id``; return how many were flipped."""
        return self._conditional_update(
            [RefreshToken.user_id == user_id, RefreshToken.is_revoked.is_(False)],
            {"is_revoked": True, "revoked_at": now, "revoked_by": reason.value},
        )

    # ---------------------------- Garbage collection ----------------------------

    def delete_expired(self, *, now: datetime) -> int:
        """Delete rows whose expiry is strictly before ``now``; return the count."""
        return self._bulk_delete([RefreshToken.expires_at < now])
