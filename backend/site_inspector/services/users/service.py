# site_inspector/services/users/service.py
"""
UserAdminService
================

Administrative account status: activation and locks. Taking an account out of
service revokes every refresh token it holds, so existing sessions end at the
next refresh instead of at token expiry.
"""

from __future__ import annotations

import logging

from site_inspector.models.base import ensure_utc
from site_inspector.models.refresh_token import RevocationReason
from site_inspector.services._shared.base import BaseService, ServiceContext
from site_inspector.services._shared.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from site_inspector.services._shared.results import ServiceResult
from site_inspector.services.authorization import Caller
from site_inspector.services.tokens.service import TokenService
from site_inspector.services.users.dto import UpdateUserStatusIn, UserStatusOut

log = logging.getLogger(__name__)


class UserAdminService(BaseService):
    def __init__(self, *, token_service: TokenService, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.tokens = token_service

    @staticmethod
    def _require_admin(caller: Caller | None) -> Caller:
        if caller is None or not caller.is_admin:
            raise AuthorizationError()
        return caller

    def get_user_status(self, caller: Caller | None, user_id: int) -> ServiceResult[UserStatusOut]:
        def _get() -> UserStatusOut:
            self._require_admin(caller)
            with self.ro_uow() as uow:
                user = uow.users.get(user_id)
                if user is None:
                    raise NotFoundError("User", user_id)
                return UserStatusOut.from_model(user)

        return self.run(_get, message="User status retrieved successfully")

    def update_user_status(
        self, caller: Caller | None, user_id: int, dto: UpdateUserStatusIn
    ) -> ServiceResult[UserStatusOut]:
        """
        Apply the fields set in ``dto`` to the account of ``user_id``.

        When the account ends up deactivated or locked, its refresh tokens are
        revoked with reason ``admin`` in the same transaction.

        :returns: ``ok`` with the new status; ``fail`` with
            ``authorization_denied`` (caller not an administrator),
            ``not_found`` or ``validation_error`` (lockout end not in the future).
        """

        def _update() -> UserStatusOut:
            admin = self._require_admin(caller)
            now = self.now_utc()
            lockout_end = ensure_utc(dto.lockout_end)
            if lockout_end is not None and lockout_end <= now:
                raise ValidationError("Lockout end must be in the future")

            with self.rw_uow() as uow:
                user = uow.users.get_for_update(user_id)
                if user is None:
                    raise NotFoundError("User", user_id)

                if dto.is_active is not None:
                    user.is_active = dto.is_active
                if dto.is_locked is not None:
                    user.is_locked = dto.is_locked
                if lockout_end is not None:
                    user.lockout_end = lockout_end
                uow.users.flush()

                revoked = 0
                if not user.is_active or user.is_locked_at(now):
                    revoked = self.tokens.revoke_all_for_user(
                        user.id, reason=RevocationReason.ADMIN, uow=uow
                    )
                out = UserStatusOut.from_model(user)

            log.info(
                "User status updated",
                extra={"event": "user.status_updated", "user_id": user_id,
                       "actor_id": admin.user_id, "revoked": revoked},
            )
            return out

        return self.run(_update, message="User status updated successfully")
