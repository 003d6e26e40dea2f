from __future__ import annotations

import logging
from datetime import datetime

from site_inspector.services._shared.ports import PasswordResetNotifier

log = logging.getLogger(__name__)


class LoggingPasswordResetNotifier(PasswordResetNotifier):
    """
    Default notifier: records that a reset was dispatched.

    The secret itself is never written to the log. Deployments that deliver
    e-mail plug a real adapter in through ``app.extensions``.
    """

    def send_reset(self, *, email: str, full_name: str, token: str, expires_at: datetime) -> None:
        domain = email.rsplit("@", 1)[-1]
        log.info(
            "Password reset instructions queued for an account at %s (expires %s)",
            domain,
            expires_at.isoformat(),
            extra={"event": "auth.reset.dispatched"},
        )
