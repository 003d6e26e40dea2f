# site_inspector/services/auth/service.py
from __future__ import annotations

import logging
from datetime import timedelta
from functools import lru_cache
from typing import Any

from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from site_inspector.models.password_reset import PasswordResetToken
from site_inspector.models.refresh_token import RevocationReason
from site_inspector.models.user import User, UserRole
from site_inspector.services._shared.base import BaseService, ServiceContext
from site_inspector.services._shared.dto import ClientInfo
from site_inspector.services._shared.errors import (
    AuthorizationError,
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    NotFoundError,
    ServiceError,
    ValidationError,
    violates,
)
from site_inspector.services._shared.ports.notifier import PasswordResetNotifier
from site_inspector.services._shared.results import ServiceResult
from site_inspector.services.auth.dto import (
    AuthOut,
    ChangePasswordIn,
    LoginIn,
    RegisterIn,
    ResetPasswordIn,
    UserPublicOut,
)
from site_inspector.services.auth.passwords import password_policy_errors
from site_inspector.services.authorization.policy import Caller
from site_inspector.services.tokens.dto import RefreshSessionOut, TokenPairOut
from site_inspector.services.tokens.service import (
    TokenService,
    generate_refresh_secret,
    hash_token,
)
from site_inspector.uow.base import UnitOfWork

log = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If the email exists, password reset instructions have been sent"
INVALID_RESET_TOKEN = "Invalid reset token"
WEAK_PASSWORD = "Password does not meet requirements"
ADMIN_GRANT_DENIED = "Only administrators can create administrator accounts"


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Verified against when the email is unknown so both login failures cost one hash check.
    return generate_password_hash(generate_refresh_secret())


class AuthService(BaseService):
    """
    Authentication lifecycle service.

    Covers registration, login, refresh, logout, password change and the
    forgot/reset password flow. Every public method returns a
    :class:`ServiceResult`; token issuance and revocation are delegated to
    :class:`TokenService` so both share one refresh-token store.
    """

    def __init__(
        self,
        *,
        token_service: TokenService,
        notifier: PasswordResetNotifier,
        reset_token_ttl: timedelta = timedelta(minutes=30),
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_service: Refresh/access token lifecycle.
        :param notifier: Delivery channel for password-reset secrets.
        :param reset_token_ttl: Lifetime of a password-reset secret.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_service
        self.notifier = notifier
        self.reset_token_ttl = reset_token_ttl

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(
        self,
        dto: RegisterIn,
        client: ClientInfo | None = None,
        *,
        caller: Caller | None = None,
    ) -> ServiceResult[AuthOut]:
        """
        Create an account and sign it in.

        :param dto: Registration input.
        :param client: Audit data of the requesting client.
        :param caller: Authenticated caller, if any. Only an administrator may
            register an account with the ``Admin`` role.
        :returns: ``ok`` with tokens and the public user; ``fail`` with
            ``validation_error`` for duplicates, weak passwords or unknown
            roles, or ``authorization_denied`` for an unprivileged admin grant.
        """

        def _run() -> AuthOut:
            role = self._parse_role(dto.role)
            if role is UserRole.ADMIN and (caller is None or not caller.is_admin):
                raise AuthorizationError(ADMIN_GRANT_DENIED)
            with self.rw_uow() as uow:
                user = self._create_user(uow, dto, role)
                pair = self.tokens.issue_tokens(user, client=client, uow=uow)
                out = AuthOut(tokens=pair, user=UserPublicOut.from_model(user))
            log.info("User registered", extra={"event": "auth.register", "user_id": out.user.id})
            return out

        return self.run(_run, message="User registered successfully")

    def create_admin(self, dto: RegisterIn) -> ServiceResult[UserPublicOut]:
        """
        Create an administrator account from a trusted operator console.

        ``dto.role`` is ignored. No tokens are issued; the new administrator
        signs in through the regular login flow.
        """

        def _run() -> UserPublicOut:
            with self.rw_uow() as uow:
                out = UserPublicOut.from_model(self._create_user(uow, dto, UserRole.ADMIN))
            log.info("Administrator created", extra={"event": "auth.admin_created", "user_id": out.id})
            return out

        return self.run(_run, message="Administrator created successfully")

    @staticmethod
    def _create_user(uow: UnitOfWork, dto: RegisterIn, role: UserRole) -> User:
        policy_errors = password_policy_errors(dto.password)
        if policy_errors:
            raise ValidationError(WEAK_PASSWORD, errors=policy_errors)
        if uow.users.exists_by_email(dto.email):
            raise ValidationError("Email already exists")
        if uow.users.exists_by_username(dto.username):
            raise ValidationError("Username already exists")

        try:
            user = User(
                email=dto.email,
                username=dto.username,
                full_name=dto.full_name,
                role=role,
                is_active=True,
            )
            user.password = dto.password
            uow.users.add(user)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        except IntegrityError as exc:
            if violates(exc, "uq_users_email"):
                raise ValidationError("Email already exists") from exc
            if violates(exc, "uq_users_username"):
                raise ValidationError("Username already exists") from exc
            raise
        return user

    @staticmethod
    def _parse_role(value: str | None) -> UserRole:
        if value is None or value == "":
            return UserRole.ENGINEER
        try:
            return UserRole(value)
        except ValueError as exc:
            allowed = ", ".join(r.value for r in UserRole)
            raise ValidationError("Invalid role", errors=[f"Role must be one of: {allowed}"]) from exc

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn, client: ClientInfo | None = None) -> ServiceResult[AuthOut]:
        """
        Authenticate credentials and issue a token pair.

        Unknown email and wrong password produce the same failure. Account
        state (deactivated, locked) is only disclosed once the password verified.
        """
        return self.run(lambda: self._login(dto, client), message="Login successful")

    def _login(self, dto: LoginIn, client: ClientInfo | None) -> AuthOut:
        now = self.now_utc()
        failure: ServiceError | None = None
        reason = ""
        out: AuthOut | None = None

        # The failed-attempt counter must be committed, so failures are raised
        # only after the unit of work closed cleanly.
        with self.rw_uow() as uow:
            user = uow.users.get_by_email(dto.email) if dto.email else None
            if user is None:
                check_password_hash(_dummy_hash(), dto.password or "")
                failure, reason = InvalidCredentialsError(), "unknown_email"
            elif not user.verify_password(dto.password):
                uow.users.record_failed_login(user)
                failure, reason = InvalidCredentialsError(), "bad_password"
            elif not user.is_active:
                failure, reason = InvalidCredentialsError("Account is deactivated"), "inactive"
            elif user.is_locked_at(now):
                failure, reason = InvalidCredentialsError("Account is locked"), "locked"
            else:
                uow.users.record_successful_login(
                    user, at=now, ip_address=client.ip_address if client else None
                )
                pair = self.tokens.issue_tokens(user, client=client, uow=uow)
                out = AuthOut(tokens=pair, user=UserPublicOut.from_model(user))

        if failure is not None or out is None:
            log.warning(
                "Login failed",
                extra={
                    "event": "auth.login.failed",
                    "user_id": user.id if user is not None else None,
                    "reason": reason,
                },
            )
            raise failure or InvalidCredentialsError()

        log.info("Login successful", extra={"event": "auth.login", "user_id": out.user.id})
        return out

    # ------------------------------------------------------------------ #
    # Refresh / logout
    # ------------------------------------------------------------------ #

    def refresh(self, raw: str, client: ClientInfo | None = None) -> ServiceResult[TokenPairOut]:
        """Rotate a refresh secret; fails with ``invalid_token`` when it is not active."""
        return self.run(
            lambda: self.tokens.validate_and_rotate(raw, client=client),
            message="Token refreshed successfully",
        )

    def logout(self, raw: str | None) -> ServiceResult[None]:
        """
        Revoke one refresh token.

        Idempotent: an unknown, expired or already revoked secret still
        answers success.
        """

        def _logout() -> None:
            if not raw:
                raise ValidationError("Refresh token is required")
            self.tokens.revoke(raw, reason=RevocationReason.LOGOUT, include_expired=True)

        return self.run(_logout, message="Logged out successfully")

    def logout_all(self, user_id: int) -> ServiceResult[dict[str, Any]]:
        def _logout_all() -> dict[str, Any]:
            with self.rw_uow() as uow:
                if uow.users.get(user_id) is None:
                    raise NotFoundError("User", user_id)
                count = self.tokens.revoke_all_for_user(
                    user_id, reason=RevocationReason.LOGOUT_ALL, uow=uow
                )
            return {"revoked": count}

        return self.run(_logout_all, message="Logged out from all sessions")

    # ------------------------------------------------------------------ #
    # Password management
    # ------------------------------------------------------------------ #

    def change_password(self, user_id: int, dto: ChangePasswordIn) -> ServiceResult[None]:
        """
        Replace the password after verifying the current one.

        Every refresh token of the user is revoked; no new pair is issued, so
        all devices (including this one) must sign in again once their access
        token expires.
        """

        def _change() -> None:
            with self.rw_uow() as uow:
                user = uow.users.get_for_update(user_id)
                if user is None:
                    raise NotFoundError("User", user_id)
                if not user.verify_password(dto.current_password):
                    raise InvalidCurrentPasswordError()
                policy_errors = password_policy_errors(dto.new_password)
                if policy_errors:
                    raise ValidationError(WEAK_PASSWORD, errors=policy_errors)

                uow.users.update_password(user, dto.new_password)
                self.tokens.revoke_all_for_user(
                    user.id, reason=RevocationReason.PASSWORD_CHANGE, uow=uow
                )
            log.info("Password changed", extra={"event": "auth.password.changed", "user_id": user_id})

        return self.run(_change, message="Password changed successfully")

    def forgot_password(self, email: str) -> ServiceResult[None]:
        """
        Start the reset flow.

        The response never reveals whether ``email`` belongs to an account. A
        secret is only generated and dispatched for existing, active users;
        any previous unredeemed secret of that user is burned.
        """

        def _forgot() -> None:
            now = self.now_utc()
            dispatch: tuple[str, str, str] | None = None
            expires_at = now + self.reset_token_ttl
            with self.rw_uow() as uow:
                user = uow.users.get_by_email(email) if email else None
                if user is not None and user.is_active:
                    raw = generate_refresh_secret()
                    uow.password_resets.invalidate_for_user(user.id, now=now)
                    uow.password_resets.add(
                        PasswordResetToken(
                            user_id=user.id,
                            token_hash=hash_token(raw),
                            expires_at=expires_at,
                            created_at=now,
                        )
                    )
                    dispatch = (user.email, user.full_name, raw)

            if dispatch is None:
                log.info("Password reset requested for unknown account", extra={"event": "auth.reset.requested"})
                return
            to, full_name, raw = dispatch
            self.notifier.send_reset(email=to, full_name=full_name, token=raw, expires_at=expires_at)
            log.info("Password reset dispatched", extra={"event": "auth.reset.requested"})

        return self.run(_forgot, message=FORGOT_PASSWORD_MESSAGE)

    def reset_password(self, dto: ResetPasswordIn) -> ServiceResult[None]:
        """
        Redeem a reset secret and set a new password.

        The secret is single use: it is consumed with a conditional update and
        every refresh token of the user is revoked.
        """

        def _reset() -> None:
            now = self.now_utc()
            with self.rw_uow() as uow:
                user = uow.users.get_by_email(dto.email) if dto.email else None
                if user is None or not user.is_active or not dto.token:
                    raise ValidationError(INVALID_RESET_TOKEN)
                row = uow.password_resets.get_active(
                    user_id=user.id, token_hash=hash_token(dto.token), now=now
                )
                if row is None:
                    raise ValidationError(INVALID_RESET_TOKEN)
                policy_errors = password_policy_errors(dto.new_password)
                if policy_errors:
                    raise ValidationError(WEAK_PASSWORD, errors=policy_errors)
                if not uow.password_resets.consume(row.id, now=now):
                    raise ValidationError(INVALID_RESET_TOKEN)

                uow.users.update_password(user, dto.new_password)
                self.tokens.revoke_all_for_user(
                    user.id, reason=RevocationReason.PASSWORD_RESET, uow=uow
                )
                user_id = user.id
            log.info("Password reset completed", extra={"event": "auth.reset.completed", "user_id": user_id})

        return self.run(_reset, message="Password has been reset successfully")

    def cleanup_expired_reset_tokens(self) -> int:
        """Delete password-reset secrets whose expiry is strictly in the past."""
        with self.rw_uow() as uow:
            count = uow.password_resets.delete_expired(now=self.now_utc())
        log.info("Expired reset tokens purged", extra={"event": "auth.reset.cleanup", "count": count})
        return count

    # ------------------------------------------------------------------ #
    # Profile & sessions
    # ------------------------------------------------------------------ #

    def get_current_user(self, user_id: int) -> ServiceResult[UserPublicOut]:
        def _get() -> UserPublicOut:
            with self.ro_uow() as uow:
                user = uow.users.get(user_id)
                if user is None:
                    raise NotFoundError("User", user_id)
                return UserPublicOut.from_model(user)

        return self.run(_get, message="User retrieved successfully")

    def list_sessions(self, user_id: int) -> ServiceResult[list[RefreshSessionOut]]:
        return self.run(
            lambda: self.tokens.list_active_sessions(user_id),
            message="Active sessions retrieved successfully",
        )
