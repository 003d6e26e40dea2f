from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class PasswordResetNotifier(Protocol):
    """Port that delivers a password-reset secret to the account owner."""

    def send_reset(self, *, email: str, full_name: str, token: str, expires_at: datetime) -> None:
        ...


@dataclass(frozen=True, slots=True)
class SentReset:
    email: str
    token: str
    expires_at: datetime


class InMemoryPasswordResetNotifier(PasswordResetNotifier):
    """Collect dispatched resets in memory so tests can read the secret back."""

    def __init__(self) -> None:
        self.sent: list[SentReset] = []

    def send_reset(self, *, email: str, full_name: str, token: str, expires_at: datetime) -> None:
        self.sent.append(SentReset(email=email, token=token, expires_at=expires_at))

    def last_token_for(self, email: str) -> str | None:
        for item in reversed(self.sent):
            if item.email == email:
                return item.token
        return None
