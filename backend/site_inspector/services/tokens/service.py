# site_inspector/services/tokens/service.py
"""
TokenService
============

Refresh-token lifecycle: issue, hash, rotate, revoke, revoke-all and cleanup.

Raw refresh secrets leave this module exactly once, inside a
:class:`TokenPairOut`; only their SHA-256 digest is persisted. A token is
usable iff it is unrevoked and ``expires_at > now``.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from typing import Any

from site_inspector.models.base import ensure_utc
from site_inspector.models.refresh_token import RefreshToken, RevocationReason
from site_inspector.models.user import User
from site_inspector.services._shared.base import BaseService, ServiceContext
from site_inspector.services._shared.dto import ClientInfo
from site_inspector.services._shared.errors import InvalidTokenError
from site_inspector.services._shared.ports.token_provider import TokenProvider
from site_inspector.services.tokens.dto import RefreshSessionOut, TokenConfig, TokenPairOut
from site_inspector.uow.base import UnitOfWork

log = logging.getLogger(__name__)

REFRESH_SECRET_BYTES = 64
USER_AGENT_MAX_LENGTH = 500


def generate_refresh_secret() -> str:
    """Return a URL-safe secret carrying 512 bits of entropy."""
    return secrets.token_urlsafe(REFRESH_SECRET_BYTES)


def hash_token(raw: str) -> str:
    """Return the SHA-256 hex digest used as the lookup key of a secret."""
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def access_claims(user: User) -> dict[str, Any]:
    """Claims embedded in every access token besides the standard ones."""
    return {
        "role": user.role.value,
        "email": user.email,
        "username": user.username,
        "full_name": user.full_name,
    }


class TokenService(BaseService):
    """
    Issue and manage access/refresh token pairs.

    The access token is a signed JWT produced through the :class:`TokenProvider`
    port. The refresh token is an opaque random secret whose digest is stored
    in ``refresh_tokens``; rotation revokes the presented row with a
    conditional update and issues a fresh pair in the same transaction.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        token_cfg: TokenConfig | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for signing access tokens.
        :param token_cfg: Access/Refresh lifetime configuration.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.cfg = token_cfg or TokenConfig()

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue_tokens(
        self,
        user: User,
        *,
        client: ClientInfo | None = None,
        uow: UnitOfWork | None = None,
    ) -> TokenPairOut:
        """
        Create a signed access token and persist a new refresh token.

        :param user: Authenticated user (must already have a primary key).
        :param client: Optional audit data of the requesting client.
        :param uow: Unit of work to join. A private one is opened when omitted.
        :returns: Token pair carrying the raw refresh secret.
        """
        if uow is not None:
            return self._issue(uow, user, client)
        with self.rw_uow() as own:
            return self._issue(own, user, client)

    def _issue(self, uow: UnitOfWork, user: User, client: ClientInfo | None) -> TokenPairOut:
        now = self.now_utc()
        raw = generate_refresh_secret()
        refresh_expires_at = now + self.cfg.refresh_expires
        user_agent = client.user_agent if client else None

        uow.refresh_tokens.add(
            RefreshToken(
                user_id=user.id,
                token_hash=hash_token(raw),
                expires_at=refresh_expires_at,
                ip_address=client.ip_address if client else None,
                user_agent=user_agent[:USER_AGENT_MAX_LENGTH] if user_agent else None,
                created_at=now,
            )
        )

        access = self.tokens.create_access_token(
            identity=str(user.id),
            additional_claims=access_claims(user),
            expires_delta=self.cfg.access_expires,
        )
        return TokenPairOut(
            access_token=access,
            refresh_token=raw,
            access_expires_at=now + self.cfg.access_expires,
            refresh_expires_at=refresh_expires_at,
        )

    # ------------------------------------------------------------------ #
    # Rotate
    # ------------------------------------------------------------------ #

    def validate_and_rotate(self, raw: str, *, client: ClientInfo | None = None) -> TokenPairOut:
        """
        Exchange a refresh secret for a new token pair.

        The presented row is revoked with a conditional ``UPDATE`` that only
        matches while it is still active, so of two concurrent rotations of the
        same secret exactly one succeeds.

        :param raw: Raw refresh secret presented by the client.
        :param client: Optional audit data for the replacement row.
        :returns: New token pair.
        :raises InvalidTokenError: Unknown, revoked or expired secret, inactive
            owner, or lost race against a concurrent rotation.
        """
        if not raw:
            raise InvalidTokenError()
        token_hash = hash_token(raw)

        with self.rw_uow() as uow:
            now = self.now_utc()
            row = uow.refresh_tokens.get_active_by_hash(token_hash, now=now)
            if row is None:
                log.warning(
                    "Refresh rejected: unknown, revoked or expired token",
                    extra={"event": "auth.refresh.rejected", "reason": "inactive"},
                )
                raise InvalidTokenError()

            user = uow.users.get(row.user_id)
            if user is None or not user.is_active:
                log.warning(
                    "Refresh rejected: owner missing or deactivated",
                    extra={"event": "auth.refresh.rejected", "user_id": row.user_id,
                           "reason": "inactive_user"},
                )
                raise InvalidTokenError()

            if not uow.refresh_tokens.revoke_if_active(
                token_hash, now=now, reason=RevocationReason.ROTATED
            ):
                log.warning(
                    "Refresh rejected: token consumed concurrently",
                    extra={"event": "auth.refresh.rejected", "user_id": user.id,
                           "reason": "race"},
                )
                raise InvalidTokenError()

            pair = self._issue(uow, user, client)

        log.info("Refresh token rotated", extra={"event": "auth.refresh.rotated", "user_id": user.id})
        return pair

    # ------------------------------------------------------------------ #
    # Revoke
    # ------------------------------------------------------------------ #

    def revoke(
        self,
        raw: str,
        *,
        reason: RevocationReason,
        include_expired: bool = False,
    ) -> bool:
        """
        Revoke one refresh token.

        :param raw: Raw refresh secret.
        :param reason: Attribution written to ``revoked_by``.
        :param include_expired: Also flag an expired but unrevoked row.
        :returns: ``True`` iff this call revoked a row.
        """
        if not raw:
            return False
        with self.rw_uow() as uow:
            revoked = uow.refresh_tokens.revoke_if_active(
                hash_token(raw),
                now=self.now_utc(),
                reason=reason,
                require_unexpired=not include_expired,
            )
        if revoked:
            log.info("Refresh token revoked", extra={"event": "auth.token.revoked", "reason": reason.value})
        return revoked

    def revoke_all_for_user(
        self,
        user_id: int,
        *,
        reason: RevocationReason,
        uow: UnitOfWork | None = None,
    ) -> int:
        """
        Revoke every unrevoked refresh token of ``user_id``.

        :returns: Number of rows revoked.
        """
        if uow is not None:
            count = uow.refresh_tokens.revoke_all_for_user(user_id, now=self.now_utc(), reason=reason)
        else:
            with self.rw_uow() as own:
                count = own.refresh_tokens.revoke_all_for_user(
                    user_id, now=self.now_utc(), reason=reason
                )
        log.info(
            "Revoked all refresh tokens of user",
            extra={"event": "auth.token.revoked_all", "user_id": user_id,
                   "reason": reason.value, "count": count},
        )
        return count

    # ------------------------------------------------------------------ #
    # Housekeeping & listing
    # ------------------------------------------------------------------ #

    def cleanup_expired(self) -> int:
        """Delete refresh tokens whose expiry is strictly in the past."""
        with self.rw_uow() as uow:
            count = uow.refresh_tokens.delete_expired(now=self.now_utc())
        log.info("Expired refresh tokens purged", extra={"event": "auth.token.cleanup", "count": count})
        return count

    def list_active_sessions(self, user_id: int) -> list[RefreshSessionOut]:
        with self.ro_uow() as uow:
            rows = uow.refresh_tokens.list_active_for_user(user_id, now=self.now_utc())
            return [
                RefreshSessionOut(
                    id=row.id,
                    created_at=ensure_utc(row.created_at),
                    expires_at=ensure_utc(row.expires_at),
                    ip_address=row.ip_address,
                    user_agent=row.user_agent,
                )
                for row in rows
            ]
