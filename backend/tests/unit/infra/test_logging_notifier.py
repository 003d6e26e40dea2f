import logging
from datetime import UTC, datetime

from site_inspector.infra.mail.logging_notifier import LoggingPasswordResetNotifier


def test_never_logs_the_secret_or_full_address(caplog):
    caplog.set_level(logging.INFO, logger="site_inspector.infra.mail.logging_notifier")

    LoggingPasswordResetNotifier().send_reset(
        email="someone@example.com",
        full_name="Some One",
        token="super-secret-token",
        expires_at=datetime(2024, 1, 1, tzinfo=UTC),
    )

    text = caplog.text
    assert "example.com" in text
    assert "super-secret-token" not in text
    assert "someone@" not in text
