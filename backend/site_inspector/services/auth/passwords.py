"""Password strength policy shared by registration, change and reset."""

from __future__ import annotations

import re

MIN_LENGTH = 8
MAX_LENGTH = 128
COMMON_PASSWORDS = frozenset({"password", "123456", "qwerty", "admin", "user", "test"})

_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^a-zA-Z0-9]"), "Password must contain at least one special character"),
)


def password_policy_errors(password: str | None) -> list[str]:
    """
    Return every policy violation of ``password``; empty when it is acceptable.

    :param password: Candidate raw password.
    :type password: str | None
    :rtype: list[str]
    """
    if not password:
        return ["Password is required"]
    errors: list[str] = []
    if len(password) < MIN_LENGTH:
        errors.append(f"Password must be at least {MIN_LENGTH} characters")
    if len(password) > MAX_LENGTH:
        errors.append(f"Password cannot exceed {MAX_LENGTH} characters")
    errors.extend(message for pattern, message in _RULES if not pattern.search(password))
    if password.lower() in COMMON_PASSWORDS:
        errors.append("Password is too common, please choose a stronger password")
    return errors
