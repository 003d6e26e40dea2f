"""User repository for persistence and credential utilities."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import func, select

from site_inspector.models.user import User
from site_inspector.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    This repository focuses on safe lookup, uniqueness checks and credential
    bookkeeping. It NEVER handles JWT or refresh-token creation.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        return self.session.execute(stmt).first() is not None

    def exists_by_username(self, username: str) -> bool:
        """Return ``True`` when the username is taken (case-insensitive)."""
        stmt = select(User.id).where(func.lower(User.username) == username.strip().lower())
        return self.session.execute(stmt).first() is not None

    # ---------------------------- Credential ops ----------------------------

    def update_password(self, user: User, new_password: str) -> None:
        """Replace the password hash and flush.

        :param user: Loaded user instance.
        :type user: User
        :param new_password: Raw password to assign; model handles hashing.
        :type new_password: str
        """
        user.password = new_password  # invokes setter → hash
        self.flush()

    def record_failed_login(self, user: User) -> int:
        """Increment the failed-login counter and return its new value."""
        user.login_attempts = (user.login_attempts or 0) + 1
        self.flush()
        return user.login_attempts

    def record_successful_login(self, user: User, *, at: datetime, ip_address: str | None) -> None:
        """Reset the failed-login counter and stamp the login audit columns."""
        user.login_attempts = 0
        user.last_login_at = at
        user.last_login_ip = ip_address
        self.flush()
